"""Base class for the per-scope negative keyword resolvers."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable

from negativeguard.analyzers.conflict_predicate import (
    has_keyword_conflict,
    has_legacy_conflict,
)
from negativeguard.analyzers.keyword_index import PositiveKeywordIndex
from negativeguard.core.exceptions import MalformedRecordError
from negativeguard.core.logging_utils import get_structured_logger
from negativeguard.data_providers.base import KeywordDataProvider
from negativeguard.models.keyword import (
    NegativeKeywordLevel,
    NegativeKeywordRecord,
    PositiveKeywordRecord,
)
from negativeguard.models.metrics import (
    ConflictAction,
    ConflictDecision,
    MetricsRecorder,
)


class BaseScopeResolver(ABC):
    """Checks one scope level's negatives against the positives they can reach.

    For each negative, the resolver narrows the positive index to the
    candidates in the negative's scope, looks for the first positive the
    negative blocks, and removes the negative unless running dry. The index
    is only read, so resolvers are independent of one another.
    """

    level: NegativeKeywordLevel

    def __init__(
        self,
        index: PositiveKeywordIndex,
        recorder: MetricsRecorder,
        data_provider: KeywordDataProvider,
        dry_run: bool = True,
        detailed_logging: bool = False,
    ):
        self.index = index
        self.recorder = recorder
        self.data_provider = data_provider
        self.dry_run = dry_run
        self.detailed_logging = detailed_logging
        self.decisions: list[ConflictDecision] = []
        self.logger = get_structured_logger(
            f"{__name__}.{self.__class__.__name__}", scope=self.level.value
        )

    @abstractmethod
    def run(self) -> list[ConflictDecision]:
        """Pull this scope's negatives from the data provider and resolve them.

        Returns:
            Decisions for every conflicting negative found by this call
        """
        pass

    @abstractmethod
    def candidates_for(
        self, negative: NegativeKeywordRecord
    ) -> list[PositiveKeywordRecord]:
        """Positives the negative can block."""
        pass

    def resolve(
        self,
        negatives: Iterable[NegativeKeywordRecord],
        candidates: list[PositiveKeywordRecord] | None = None,
    ) -> list[ConflictDecision]:
        """Check a stream of negatives in the order it yields them.

        Args:
            negatives: Negative keywords of this resolver's level
            candidates: Positives shared by every negative in the stream;
                looked up per negative with ``candidates_for`` when omitted

        Returns:
            Decisions for the conflicting negatives in this stream
        """
        decisions = []
        for negative in negatives:
            try:
                negative.require_scope_identity()
            except MalformedRecordError as e:
                self.recorder.malformed_record()
                self.logger.warning(f"Skipping malformed record: {e}")
                continue

            scoped = candidates if candidates is not None else self.candidates_for(negative)
            decision = self._check_negative(negative, scoped)
            if decision is not None:
                decisions.append(decision)

        self.decisions.extend(decisions)
        return decisions

    def _check_negative(
        self,
        negative: NegativeKeywordRecord,
        candidates: list[PositiveKeywordRecord],
    ) -> ConflictDecision | None:
        blocked = next(
            (
                positive
                for positive in candidates
                if has_keyword_conflict(
                    negative.text, negative.match_type, positive.text, positive.match_type
                )
            ),
            None,
        )
        legacy_flagged = any(
            has_legacy_conflict(
                negative.text, negative.match_type, positive.text, positive.match_type
            )
            for positive in candidates
        )

        if blocked is None:
            if legacy_flagged:
                self.recorder.false_positive_avoided()
            if self.detailed_logging:
                self.logger.decision(
                    logging.DEBUG,
                    f"No conflict for {negative.match_type} negative '{negative.text}' "
                    f"against {len(candidates)} keywords"
                    + (" (substring match rejected)" if legacy_flagged else ""),
                    scope=self.level.value,
                    negative_text=negative.text,
                    negative_match_type=negative.match_type,
                    action="NONE",
                )
            return None

        self.recorder.conflict_found(self.level)
        action = self._apply(negative)

        self.logger.decision(
            logging.INFO,
            f"{self.level.value} negative '{negative.text}' ({negative.match_type}) "
            f"in {negative.scope_label or 'unnamed scope'} blocks "
            f"'{blocked.text}' in {blocked.campaign_name} > {blocked.ad_group_name}: "
            f"{action.value}",
            scope=self.level.value,
            negative_text=negative.text,
            negative_match_type=negative.match_type,
            positive_text=blocked.text,
            action=action.value,
        )

        return ConflictDecision(
            level=self.level,
            negative_text=negative.text,
            negative_match_type=negative.match_type,
            negative_criterion_id=negative.criterion_id,
            campaign_name=negative.campaign_name,
            ad_group_name=negative.ad_group_name,
            shared_set_name=negative.shared_set_name,
            positive_text=blocked.text,
            positive_match_type=blocked.match_type,
            positive_campaign_name=blocked.campaign_name,
            positive_ad_group_name=blocked.ad_group_name,
            action=action,
        )

    def _apply(self, negative: NegativeKeywordRecord) -> ConflictAction:
        if self.dry_run:
            return ConflictAction.FLAGGED

        if not self.data_provider.remove_negative_keyword(negative):
            self.logger.warning(
                f"Platform did not remove {self.level.value} negative '{negative.text}'"
            )
            return ConflictAction.REMOVAL_FAILED

        self.recorder.conflict_removed(self.level)
        return ConflictAction.REMOVED
