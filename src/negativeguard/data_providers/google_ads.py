"""Google Ads data provider implementation."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from negativeguard.clients.google.validation import GoogleAdsInputValidator
from negativeguard.data_providers.base import KeywordDataProvider
from negativeguard.models.keyword import (
    NegativeKeywordLevel,
    NegativeKeywordRecord,
    PositiveKeywordRecord,
    SharedNegativeList,
)

if TYPE_CHECKING:
    from negativeguard.clients.google.client import GoogleAdsAPIClient
    from negativeguard.core.config import DateRange

logger = logging.getLogger(__name__)

POSITIVE_KEYWORDS_QUERY = """
    SELECT
        campaign.id,
        campaign.name,
        ad_group.id,
        ad_group.name,
        ad_group_criterion.criterion_id,
        ad_group_criterion.keyword.text,
        ad_group_criterion.keyword.match_type
    FROM ad_group_criterion
    WHERE ad_group_criterion.type = 'KEYWORD'
        AND ad_group_criterion.negative = FALSE
        AND ad_group_criterion.status = 'ENABLED'
        AND ad_group.status = 'ENABLED'
        AND campaign.status = 'ENABLED'
""".strip()

# keyword_view only returns keywords with activity in the date segment
ACTIVE_POSITIVE_KEYWORDS_QUERY = """
    SELECT
        campaign.id,
        campaign.name,
        ad_group.id,
        ad_group.name,
        ad_group_criterion.criterion_id,
        ad_group_criterion.keyword.text,
        ad_group_criterion.keyword.match_type,
        metrics.impressions
    FROM keyword_view
    WHERE ad_group_criterion.negative = FALSE
        AND ad_group_criterion.status = 'ENABLED'
        AND ad_group.status = 'ENABLED'
        AND campaign.status = 'ENABLED'
        AND segments.date BETWEEN {date_range}
""".strip()

AD_GROUP_NEGATIVES_QUERY = """
    SELECT
        campaign.id,
        campaign.name,
        ad_group.id,
        ad_group.name,
        ad_group_criterion.criterion_id,
        ad_group_criterion.keyword.text,
        ad_group_criterion.keyword.match_type
    FROM ad_group_criterion
    WHERE ad_group_criterion.type = 'KEYWORD'
        AND ad_group_criterion.negative = TRUE
        AND ad_group_criterion.status != 'REMOVED'
""".strip()

CAMPAIGN_NEGATIVES_QUERY = """
    SELECT
        campaign.id,
        campaign.name,
        campaign_criterion.criterion_id,
        campaign_criterion.keyword.text,
        campaign_criterion.keyword.match_type
    FROM campaign_criterion
    WHERE campaign_criterion.type = 'KEYWORD'
        AND campaign_criterion.negative = TRUE
        AND campaign_criterion.status != 'REMOVED'
""".strip()

SHARED_LISTS_QUERY = """
    SELECT
        shared_set.id,
        shared_set.name
    FROM shared_set
    WHERE shared_set.type = 'NEGATIVE_KEYWORDS'
        AND shared_set.status = 'ENABLED'
""".strip()

SHARED_LIST_NEGATIVES_QUERY = """
    SELECT
        shared_set.id,
        shared_set.name,
        shared_criterion.criterion_id,
        shared_criterion.keyword.text,
        shared_criterion.keyword.match_type
    FROM shared_criterion
    WHERE shared_set.id = {shared_set_id}
        AND shared_criterion.type = 'KEYWORD'
""".strip()

SHARED_LIST_CAMPAIGNS_QUERY = """
    SELECT
        campaign.id,
        shared_set.id
    FROM campaign_shared_set
    WHERE campaign_shared_set.status = 'ENABLED'
        AND shared_set.id = {shared_set_id}
""".strip()


def _enum_name(value: Any) -> str:
    """Return the name of a proto-plus enum, or the value itself as a string."""
    return getattr(value, "name", None) or str(value)


def _id(value: Any) -> str | None:
    """Stringify an id field, treating 0 and missing as absent."""
    if value in (None, "", 0):
        return None
    return str(value)


class GoogleAdsDataProvider(KeywordDataProvider):
    """Data provider implementation for Google Ads API.

    This provider wraps the GoogleAdsAPIClient to implement the
    KeywordDataProvider interface for one customer account. Every listing
    streams rows from ``search_stream``, so records are mapped as pages
    arrive.
    """

    def __init__(self, api_client: GoogleAdsAPIClient, customer_id: str):
        """Initialize the Google Ads data provider.

        Args:
            api_client: Configured GoogleAdsAPIClient instance
            customer_id: Account to audit

        Raises:
            ValueError: If the customer ID is not 7-10 digits
        """
        self.api_client = api_client
        self.customer_id = GoogleAdsInputValidator.validate_customer_id(customer_id)

    def _search(self, query: str) -> Iterator[Any]:
        return self.api_client.search_stream(self.customer_id, query)

    def list_active_positive_keywords(
        self, date_range: DateRange | None = None
    ) -> Iterator[PositiveKeywordRecord]:
        """Yield enabled keywords, optionally only those active in ``date_range``.

        keyword_view returns one row per keyword per day in the range, so
        repeated criteria are yielded once.
        """
        if date_range is None:
            query = POSITIVE_KEYWORDS_QUERY
        else:
            query = ACTIVE_POSITIVE_KEYWORDS_QUERY.format(date_range=date_range.to_gaql())

        seen: set[tuple[str | None, str | None, str | None]] = set()
        for row in self._search(query):
            criterion = row.ad_group_criterion
            record = PositiveKeywordRecord(
                keyword_id=_id(criterion.criterion_id),
                text=criterion.keyword.text,
                match_type=_enum_name(criterion.keyword.match_type),
                campaign_id=_id(row.campaign.id),
                campaign_name=row.campaign.name,
                ad_group_id=_id(row.ad_group.id),
                ad_group_name=row.ad_group.name,
            )
            key = (record.campaign_id, record.ad_group_id, record.keyword_id)
            if record.keyword_id is not None:
                if key in seen:
                    continue
                seen.add(key)
            yield record

    def list_ad_group_negative_keywords(self) -> Iterator[NegativeKeywordRecord]:
        for row in self._search(AD_GROUP_NEGATIVES_QUERY):
            criterion = row.ad_group_criterion
            yield NegativeKeywordRecord(
                criterion_id=_id(criterion.criterion_id),
                text=criterion.keyword.text,
                match_type=_enum_name(criterion.keyword.match_type),
                level=NegativeKeywordLevel.AD_GROUP,
                campaign_id=_id(row.campaign.id),
                campaign_name=row.campaign.name,
                ad_group_id=_id(row.ad_group.id),
                ad_group_name=row.ad_group.name,
            )

    def list_campaign_negative_keywords(self) -> Iterator[NegativeKeywordRecord]:
        for row in self._search(CAMPAIGN_NEGATIVES_QUERY):
            criterion = row.campaign_criterion
            yield NegativeKeywordRecord(
                criterion_id=_id(criterion.criterion_id),
                text=criterion.keyword.text,
                match_type=_enum_name(criterion.keyword.match_type),
                level=NegativeKeywordLevel.CAMPAIGN,
                campaign_id=_id(row.campaign.id),
                campaign_name=row.campaign.name,
            )

    def list_shared_negative_lists(self) -> Iterator[SharedNegativeList]:
        for row in self._search(SHARED_LISTS_QUERY):
            shared_set_id = _id(row.shared_set.id)
            if shared_set_id is None:
                logger.warning(f"Skipping shared list '{row.shared_set.name}' with no id")
                continue
            yield SharedNegativeList(id=shared_set_id, name=row.shared_set.name)

    def list_shared_list_negative_keywords(
        self, shared_set_id: str
    ) -> Iterator[NegativeKeywordRecord]:
        shared_set_id = GoogleAdsInputValidator.validate_shared_set_id(shared_set_id)
        query = SHARED_LIST_NEGATIVES_QUERY.format(shared_set_id=shared_set_id)
        for row in self._search(query):
            criterion = row.shared_criterion
            yield NegativeKeywordRecord(
                criterion_id=_id(criterion.criterion_id),
                text=criterion.keyword.text,
                match_type=_enum_name(criterion.keyword.match_type),
                level=NegativeKeywordLevel.SHARED_SET,
                shared_set_id=_id(row.shared_set.id),
                shared_set_name=row.shared_set.name,
            )

    def list_campaigns_attached_to(self, shared_set_id: str) -> set[str]:
        shared_set_id = GoogleAdsInputValidator.validate_shared_set_id(shared_set_id)
        query = SHARED_LIST_CAMPAIGNS_QUERY.format(shared_set_id=shared_set_id)
        campaign_ids = set()
        for row in self._search(query):
            campaign_id = _id(row.campaign.id)
            if campaign_id is not None:
                campaign_ids.add(campaign_id)
        return campaign_ids

    def remove_negative_keyword(self, record: NegativeKeywordRecord) -> bool:
        return self.api_client.remove_negative_criterion(self.customer_id, record)
