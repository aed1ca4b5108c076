"""Base KeywordDataProvider interface for all data providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from negativeguard.core.config import DateRange
    from negativeguard.models.keyword import (
        NegativeKeywordRecord,
        PositiveKeywordRecord,
        SharedNegativeList,
    )


class KeywordDataProvider(ABC):
    """Interface to the advertising platform the audit reads from and writes to.

    Every ``list_*`` method returns a lazy iterator: records are produced on
    demand, the sequence is finite, and it cannot be restarted. Paging is the
    provider's business.
    """

    @abstractmethod
    def list_active_positive_keywords(
        self, date_range: DateRange | None = None
    ) -> Iterator[PositiveKeywordRecord]:
        """Yield enabled keywords in enabled ad groups of enabled campaigns."""
        pass

    @abstractmethod
    def list_ad_group_negative_keywords(self) -> Iterator[NegativeKeywordRecord]:
        """Yield negative keywords defined on ad groups."""
        pass

    @abstractmethod
    def list_campaign_negative_keywords(self) -> Iterator[NegativeKeywordRecord]:
        """Yield negative keywords defined on campaigns."""
        pass

    @abstractmethod
    def list_shared_negative_lists(self) -> Iterator[SharedNegativeList]:
        """Yield the account's shared negative keyword lists."""
        pass

    @abstractmethod
    def list_shared_list_negative_keywords(
        self, shared_set_id: str
    ) -> Iterator[NegativeKeywordRecord]:
        """Yield the negative keywords in one shared list."""
        pass

    @abstractmethod
    def list_campaigns_attached_to(self, shared_set_id: str) -> set[str]:
        """Return ids of campaigns the shared list is currently applied to."""
        pass

    @abstractmethod
    def remove_negative_keyword(self, record: NegativeKeywordRecord) -> bool:
        """Remove a negative keyword from the platform.

        Removing a keyword that is already gone counts as success.

        Returns:
            True if the keyword is no longer present, False on a per-record
            failure the caller may record and move past

        Raises:
            PlatformOperationError: If the platform call itself fails
        """
        pass
