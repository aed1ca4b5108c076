"""Data provider abstraction layer for the negative keyword audit."""

from negativeguard.data_providers.base import KeywordDataProvider
from negativeguard.data_providers.google_ads import GoogleAdsDataProvider
from negativeguard.data_providers.mock_provider import MockDataProvider

__all__ = ["KeywordDataProvider", "GoogleAdsDataProvider", "MockDataProvider"]
