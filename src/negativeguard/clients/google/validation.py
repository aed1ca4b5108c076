"""Input validation for values interpolated into GAQL queries and resource paths."""

import re


class GoogleAdsInputValidator:
    """Validates ids before they reach a GAQL query or a resource name."""

    NUMERIC_ID_PATTERN = re.compile(r"^\d+$")
    CUSTOMER_ID_PATTERN = re.compile(r"^\d{7,10}$")

    @classmethod
    def validate_customer_id(cls, customer_id: str) -> str:
        """Validate customer ID format.

        Args:
            customer_id: Customer ID string to validate

        Returns:
            Customer ID with hyphens removed

        Raises:
            ValueError: If customer ID is invalid
        """
        if not isinstance(customer_id, str):
            customer_id = str(customer_id)

        cleaned_id = customer_id.replace("-", "").strip()

        if cls.CUSTOMER_ID_PATTERN.match(cleaned_id):
            return cleaned_id
        raise ValueError(
            f"Invalid customer ID format: '{customer_id}'. "
            "Must be 7-10 digits (with or without hyphens)"
        )

    @classmethod
    def validate_resource_id(cls, resource_id: str, kind: str = "resource") -> str:
        """Validate a campaign, ad group, shared set or criterion id.

        Raises:
            ValueError: If the id is not a positive integer
        """
        if not isinstance(resource_id, str):
            resource_id = str(resource_id)

        resource_id = resource_id.strip()

        if not cls.NUMERIC_ID_PATTERN.match(resource_id) or int(resource_id) <= 0:
            raise ValueError(
                f"Invalid {kind} ID: '{resource_id}'. "
                "Must be a numeric string representing a positive integer"
            )
        return resource_id

    @classmethod
    def validate_shared_set_id(cls, shared_set_id: str) -> str:
        """Validate shared set ID to ensure it is numeric and positive."""
        return cls.validate_resource_id(shared_set_id, kind="shared set")
