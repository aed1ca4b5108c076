"""Base model with common configuration."""

from datetime import datetime, timezone

from pydantic import BaseModel as PydanticBaseModel


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


class BaseNGModel(PydanticBaseModel):
    """Base model for all NegativeGuard models."""

    model_config = {
        # Use enum values instead of names
        "use_enum_values": True,
        # Validate on assignment
        "validate_assignment": True,
        # Allow population by field name
        "populate_by_name": True,
        # Enum defaults are stored as values too
        "validate_default": True,
    }
