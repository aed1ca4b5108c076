"""Google Ads API client implementation."""

import logging
from collections.abc import Iterator
from typing import Any

from google.ads.googleads.client import GoogleAdsClient  # type: ignore[import-untyped]
from google.ads.googleads.errors import (
    GoogleAdsException,  # type: ignore[import-untyped]
)

from negativeguard.clients.google.validation import GoogleAdsInputValidator
from negativeguard.core.config import GoogleAdsConfig
from negativeguard.core.exceptions import (
    AuthenticationError,
    PlatformOperationError,
    RateLimitError,
)
from negativeguard.models.keyword import NegativeKeywordLevel, NegativeKeywordRecord

logger = logging.getLogger(__name__)

# (service, operation type, mutate method) per negative keyword level
_REMOVAL_SERVICES = {
    NegativeKeywordLevel.AD_GROUP: (
        "AdGroupCriterionService",
        "AdGroupCriterionOperation",
        "mutate_ad_group_criteria",
    ),
    NegativeKeywordLevel.CAMPAIGN: (
        "CampaignCriterionService",
        "CampaignCriterionOperation",
        "mutate_campaign_criteria",
    ),
    NegativeKeywordLevel.SHARED_SET: (
        "SharedCriterionService",
        "SharedCriterionOperation",
        "mutate_shared_criteria",
    ),
}


def _extract_error_summary(exception: GoogleAdsException) -> tuple[str, list[str]]:
    """Flatten a GoogleAdsException into a message and its error code strings."""
    messages = []
    codes = []
    failure = getattr(exception, "failure", None)
    for error in getattr(failure, "errors", None) or []:
        code = str(error.error_code)
        codes.append(code)
        messages.append(f"{code}: {error.message}")
    return "; ".join(messages) or str(exception), codes


def _is_not_found(codes: list[str]) -> bool:
    return bool(codes) and all("NOT_FOUND" in code.upper() for code in codes)


class GoogleAdsAPIClient:
    """Google Ads API client for reading keywords and removing negatives."""

    def __init__(
        self,
        developer_token: str,
        client_id: str,
        client_secret: str,
        refresh_token: str,
        login_customer_id: str | None = None,
    ):
        """Initialize Google Ads API client.

        Args:
            developer_token: Google Ads API developer token
            client_id: OAuth2 client ID
            client_secret: OAuth2 client secret
            refresh_token: OAuth2 refresh token
            login_customer_id: MCC account ID (if applicable)
        """
        self.developer_token = developer_token
        self.client_id = client_id
        self.client_secret = client_secret
        self.refresh_token = refresh_token
        self.login_customer_id = login_customer_id
        self._client = None
        self._initialized = False

    @classmethod
    def from_config(cls, config: GoogleAdsConfig) -> "GoogleAdsAPIClient":
        """Build a client from validated Google Ads settings."""
        return cls(
            developer_token=config.developer_token.get_secret_value(),
            client_id=config.client_id,
            client_secret=config.client_secret.get_secret_value(),
            refresh_token=config.refresh_token.get_secret_value(),
            login_customer_id=config.login_customer_id,
        )

    def _get_client(self) -> GoogleAdsClient:
        """Get or create Google Ads client instance."""
        if not self._initialized:
            credentials = {
                "developer_token": self.developer_token,
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "refresh_token": self.refresh_token,
                "use_proto_plus": True,
            }

            if self.login_customer_id:
                credentials["login_customer_id"] = self.login_customer_id

            try:
                self._client = GoogleAdsClient.load_from_dict(credentials)
                self._initialized = True
            except Exception as ex:
                logger.error(f"Failed to initialize Google Ads client: {ex}")
                raise AuthenticationError(
                    f"Failed to authenticate with Google Ads API: {str(ex)}"
                ) from ex

        return self._client

    def search_stream(self, customer_id: str, query: str) -> Iterator[Any]:
        """Stream Google Ads search results using a generator.

        Pages are requested one at a time as the caller consumes rows.

        Args:
            customer_id: Google Ads customer ID
            query: GAQL query string

        Yields:
            Individual result rows from the Google Ads API

        Raises:
            AuthenticationError: For authentication failures
            RateLimitError: When the API rejects the request for quota
            PlatformOperationError: For any other API failure
        """
        customer_id = GoogleAdsInputValidator.validate_customer_id(customer_id)
        client = self._get_client()
        ga_service = client.get_service("GoogleAdsService")

        page_token = None
        total_yielded = 0

        while True:
            search_request = client.get_type("SearchGoogleAdsRequest")
            search_request.customer_id = customer_id
            search_request.query = query
            if page_token:
                search_request.page_token = page_token

            try:
                response = ga_service.search(request=search_request)
            except GoogleAdsException as ex:
                self._handle_google_ads_exception(ex, operation="search")
            except Exception as ex:
                logger.error(f"Unexpected error in search: {ex}")
                raise PlatformOperationError(
                    f"Search request failed: {ex}", operation="search"
                ) from ex

            page_count = 0
            for row in response:
                yield row
                page_count += 1
                total_yielded += 1

            logger.debug(
                f"Streamed page with {page_count} results (total: {total_yielded})"
            )

            if not getattr(response, "next_page_token", None):
                break

            page_token = response.next_page_token

        logger.debug(f"Search stream completed: {total_yielded} results from {customer_id}")

    def remove_negative_criterion(
        self, customer_id: str, record: NegativeKeywordRecord
    ) -> bool:
        """Remove one negative keyword criterion.

        Args:
            customer_id: Google Ads customer ID
            record: The negative keyword to remove

        Returns:
            True once the criterion is gone, including when it was already
            removed; False when the record lacks the ids to address it

        Raises:
            AuthenticationError: For authentication failures
            RateLimitError: When the API rejects the request for quota
            PlatformOperationError: For any other API failure
        """
        customer_id = GoogleAdsInputValidator.validate_customer_id(customer_id)
        level = NegativeKeywordLevel(record.level)
        service_name, operation_type, mutate_method = _REMOVAL_SERVICES[level]

        try:
            criterion_id = GoogleAdsInputValidator.validate_resource_id(
                record.criterion_id or "", kind="criterion"
            )
            client = self._get_client()
            service = client.get_service(service_name)
            resource_name = self._criterion_path(service, customer_id, record, criterion_id)
        except ValueError as ex:
            logger.warning(f"Cannot address {level.value} negative '{record.text}': {ex}")
            return False

        operation = client.get_type(operation_type)
        operation.remove = resource_name

        try:
            getattr(service, mutate_method)(customer_id=customer_id, operations=[operation])
        except GoogleAdsException as ex:
            _, codes = _extract_error_summary(ex)
            if _is_not_found(codes):
                logger.info(f"Negative criterion {resource_name} already removed")
                return True
            self._handle_google_ads_exception(ex, operation=mutate_method)
        except Exception as ex:
            logger.error(f"Unexpected error removing {resource_name}: {ex}")
            raise PlatformOperationError(
                f"Failed to remove negative keyword '{record.text}': {ex}",
                operation=mutate_method,
            ) from ex

        logger.info(f"Removed negative criterion {resource_name}")
        return True

    @staticmethod
    def _criterion_path(
        service: Any,
        customer_id: str,
        record: NegativeKeywordRecord,
        criterion_id: str,
    ) -> str:
        level = NegativeKeywordLevel(record.level)
        if level == NegativeKeywordLevel.AD_GROUP:
            ad_group_id = GoogleAdsInputValidator.validate_resource_id(
                record.ad_group_id or "", kind="ad group"
            )
            return service.ad_group_criterion_path(customer_id, ad_group_id, criterion_id)
        if level == NegativeKeywordLevel.CAMPAIGN:
            campaign_id = GoogleAdsInputValidator.validate_resource_id(
                record.campaign_id or "", kind="campaign"
            )
            return service.campaign_criterion_path(customer_id, campaign_id, criterion_id)
        shared_set_id = GoogleAdsInputValidator.validate_shared_set_id(
            record.shared_set_id or ""
        )
        return service.shared_criterion_path(customer_id, shared_set_id, criterion_id)

    def _handle_google_ads_exception(
        self, exception: GoogleAdsException, operation: str | None = None
    ) -> None:
        """Handle Google Ads API exceptions.

        Args:
            exception: The GoogleAdsException to handle
            operation: Name of the call that failed

        Raises:
            AuthenticationError: For authentication failures
            RateLimitError: For rate limit errors
            PlatformOperationError: For other API errors
        """
        full_message, codes = _extract_error_summary(exception)

        for code in (code.upper() for code in codes):
            if "AUTHENTICATION" in code or "AUTHORIZATION" in code:
                raise AuthenticationError(f"Authentication failed: {full_message}")
            elif "RATE_EXCEEDED" in code or "QUOTA" in code:
                raise RateLimitError(f"Rate limit exceeded: {full_message}")

        logger.error(f"Google Ads API error in {operation}: {full_message}")
        raise PlatformOperationError(
            f"Google Ads API error: {full_message}", operation=operation
        )
