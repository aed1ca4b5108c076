"""Read-only lookup views over the account's active positive keywords."""

import logging
from collections.abc import Iterable

from negativeguard.models.keyword import PositiveKeywordRecord

logger = logging.getLogger(__name__)


class PositiveKeywordIndex:
    """Positive keywords grouped by campaign and ad group.

    Built once per run with ``build`` and not modified afterwards. Every
    record lives in exactly one ``by_scope`` bucket and once in ``details``;
    ``all_texts`` is the deduplicated set of their texts.
    """

    def __init__(self) -> None:
        self.by_scope: dict[str, dict[str, list[PositiveKeywordRecord]]] = {}
        self.all_texts: set[str] = set()
        self.details: list[PositiveKeywordRecord] = []
        self.truncated = False
        self.skipped_records = 0

    @classmethod
    def build(
        cls,
        records: Iterable[PositiveKeywordRecord],
        max_keywords: int | None = None,
    ) -> "PositiveKeywordIndex":
        """Ingest positive keywords in a single pass.

        Args:
            records: Lazily produced positive keyword records
            max_keywords: Stop after reading this many records, skipped
                malformed records included

        Returns:
            The populated index. ``truncated`` is set when ingestion stopped
            at ``max_keywords`` with records still left in the stream.
        """
        index = cls()
        consumed = 0

        for record in records:
            if max_keywords is not None and consumed >= max_keywords:
                index.truncated = True
                logger.warning(
                    f"Reached the maximum of {max_keywords} keywords to process; "
                    "remaining positive keywords were not indexed and conflict "
                    "results for this run are partial"
                )
                break

            consumed += 1
            if not record.has_scope_identity():
                index.skipped_records += 1
                logger.warning(
                    f"Skipping positive keyword '{record.text}' with no "
                    f"campaign/ad group id (campaign_id={record.campaign_id!r}, "
                    f"ad_group_id={record.ad_group_id!r})"
                )
                continue

            index._add(record)

        logger.info(
            f"Indexed {len(index.details)} positive keywords "
            f"({len(index.all_texts)} unique texts) across "
            f"{len(index.by_scope)} campaigns"
        )
        return index

    def _add(self, record: PositiveKeywordRecord) -> None:
        ad_groups = self.by_scope.setdefault(record.campaign_id, {})
        ad_groups.setdefault(record.ad_group_id, []).append(record)
        self.all_texts.add(record.text)
        self.details.append(record)

    def __len__(self) -> int:
        return len(self.details)

    def for_ad_group(
        self, campaign_id: str | None, ad_group_id: str | None
    ) -> list[PositiveKeywordRecord]:
        """Positives in one ad group."""
        return list(self.by_scope.get(campaign_id, {}).get(ad_group_id, []))

    def for_campaign(self, campaign_id: str | None) -> list[PositiveKeywordRecord]:
        """Positives in every ad group of one campaign."""
        keywords: list[PositiveKeywordRecord] = []
        for ad_group_keywords in self.by_scope.get(campaign_id, {}).values():
            keywords.extend(ad_group_keywords)
        return keywords

    def for_campaigns(self, campaign_ids: Iterable[str]) -> list[PositiveKeywordRecord]:
        """Positives in any of the given campaigns."""
        keywords: list[PositiveKeywordRecord] = []
        for campaign_id in sorted(set(campaign_ids)):
            keywords.extend(self.for_campaign(campaign_id))
        return keywords
