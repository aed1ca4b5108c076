"""Mock data provider for testing."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from negativeguard.core.exceptions import PlatformOperationError
from negativeguard.data_providers.base import KeywordDataProvider
from negativeguard.models.keyword import NegativeKeywordLevel

if TYPE_CHECKING:
    from negativeguard.core.config import DateRange
    from negativeguard.models.keyword import (
        NegativeKeywordRecord,
        PositiveKeywordRecord,
        SharedNegativeList,
    )


class MockDataProvider(KeywordDataProvider):
    """In-memory data provider for testing.

    Serves the records it was constructed with and records every removal it
    is asked to perform. Removed negatives disappear from later listings, so
    running twice in live mode behaves like the real platform.
    """

    def __init__(
        self,
        positives: Iterable[PositiveKeywordRecord] = (),
        negatives: Iterable[NegativeKeywordRecord] = (),
        shared_lists: Iterable[SharedNegativeList] = (),
        attachments: dict[str, set[str]] | None = None,
        fail_removal_for: Iterable[str] = (),
        raise_on_removal: bool = False,
    ):
        """Initialize the mock data provider.

        Args:
            positives: Active positive keywords
            negatives: Negatives of every level; shared list negatives are
                matched to their list by ``shared_set_id``
            shared_lists: Shared negative lists
            attachments: Campaign ids each shared list is applied to
            fail_removal_for: Negative texts whose removal returns False
            raise_on_removal: Raise PlatformOperationError on any removal
        """
        self.positives = list(positives)
        self.negatives = list(negatives)
        self.shared_lists = list(shared_lists)
        self.attachments = attachments or {}
        self.fail_removal_for = set(fail_removal_for)
        self.raise_on_removal = raise_on_removal

        self.removed: list[NegativeKeywordRecord] = []
        self.removal_requests: list[NegativeKeywordRecord] = []
        self.requested_date_range: DateRange | None = None

    def list_active_positive_keywords(
        self, date_range: DateRange | None = None
    ) -> Iterator[PositiveKeywordRecord]:
        self.requested_date_range = date_range
        yield from self.positives

    def _negatives_at(self, level: NegativeKeywordLevel) -> Iterator[NegativeKeywordRecord]:
        for record in list(self.negatives):
            if record.level == level:
                yield record

    def list_ad_group_negative_keywords(self) -> Iterator[NegativeKeywordRecord]:
        return self._negatives_at(NegativeKeywordLevel.AD_GROUP)

    def list_campaign_negative_keywords(self) -> Iterator[NegativeKeywordRecord]:
        return self._negatives_at(NegativeKeywordLevel.CAMPAIGN)

    def list_shared_negative_lists(self) -> Iterator[SharedNegativeList]:
        yield from self.shared_lists

    def list_shared_list_negative_keywords(
        self, shared_set_id: str
    ) -> Iterator[NegativeKeywordRecord]:
        for record in self._negatives_at(NegativeKeywordLevel.SHARED_SET):
            if record.shared_set_id == shared_set_id:
                yield record

    def list_campaigns_attached_to(self, shared_set_id: str) -> set[str]:
        return set(self.attachments.get(shared_set_id, set()))

    def remove_negative_keyword(self, record: NegativeKeywordRecord) -> bool:
        self.removal_requests.append(record)

        if self.raise_on_removal:
            raise PlatformOperationError(
                f"Mock removal failure for '{record.text}'",
                operation="remove_negative_keyword",
            )
        if record.text in self.fail_removal_for:
            return False

        if record in self.negatives:
            self.negatives.remove(record)
            self.removed.append(record)
        return True
