"""Google Ads platform integration."""

from .client import GoogleAdsAPIClient
from .validation import GoogleAdsInputValidator

__all__ = [
    "GoogleAdsAPIClient",
    "GoogleAdsInputValidator",
]
