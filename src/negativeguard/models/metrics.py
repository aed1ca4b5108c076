"""Run metrics and per-decision records."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field

from negativeguard.models.base import BaseNGModel, utc_now
from negativeguard.models.keyword import NegativeKeywordLevel
from negativeguard.models.validation import ValidationReport

_FOUND_FIELDS = {
    NegativeKeywordLevel.AD_GROUP: "ad_group_conflicts_found",
    NegativeKeywordLevel.CAMPAIGN: "campaign_conflicts_found",
    NegativeKeywordLevel.SHARED_SET: "shared_list_conflicts_found",
}

_REMOVED_FIELDS = {
    NegativeKeywordLevel.AD_GROUP: "ad_group_conflicts_removed",
    NegativeKeywordLevel.CAMPAIGN: "campaign_conflicts_removed",
    NegativeKeywordLevel.SHARED_SET: "shared_list_conflicts_removed",
}


class ConflictAction(str, Enum):
    """What the resolver did with a conflicting negative."""

    FLAGGED = "FLAGGED"
    REMOVED = "REMOVED"
    REMOVAL_FAILED = "REMOVAL_FAILED"


class RunStatus(str, Enum):
    """Outcome of an audit run."""

    COMPLETED = "COMPLETED"
    ABORTED = "ABORTED"


class ConflictMetrics(BaseNGModel):
    """Counters accumulated over one audit run."""

    ad_group_conflicts_found: int = 0
    ad_group_conflicts_removed: int = 0
    campaign_conflicts_found: int = 0
    campaign_conflicts_removed: int = 0
    shared_list_conflicts_found: int = 0
    shared_list_conflicts_removed: int = 0
    false_positives_avoided: int = 0

    keywords_indexed: int = 0
    processing_cap_reached: bool = False
    malformed_records_skipped: int = 0
    shared_lists_checked: int = 0
    shared_lists_skipped: int = 0

    @property
    def total_conflicts_found(self) -> int:
        return (
            self.ad_group_conflicts_found
            + self.campaign_conflicts_found
            + self.shared_list_conflicts_found
        )

    @property
    def total_conflicts_removed(self) -> int:
        return (
            self.ad_group_conflicts_removed
            + self.campaign_conflicts_removed
            + self.shared_list_conflicts_removed
        )

    def counts(self) -> dict[str, int]:
        """Conflict counters only, keyed by field name."""
        fields = [*_FOUND_FIELDS.values(), *_REMOVED_FIELDS.values()]
        counts = {name: getattr(self, name) for name in fields}
        counts["false_positives_avoided"] = self.false_positives_avoided
        return counts


class MetricsRecorder:
    """Increment-only handle on a ConflictMetrics owned by the run coordinator.

    Resolvers get one of these instead of the metrics object itself, so they
    can add to the run's counters but never reset or read them back.
    """

    __slots__ = ("_metrics",)

    def __init__(self, metrics: ConflictMetrics):
        self._metrics = metrics

    def _bump(self, field: str) -> None:
        setattr(self._metrics, field, getattr(self._metrics, field) + 1)

    def conflict_found(self, level: NegativeKeywordLevel | str) -> None:
        self._bump(_FOUND_FIELDS[NegativeKeywordLevel(level)])

    def conflict_removed(self, level: NegativeKeywordLevel | str) -> None:
        self._bump(_REMOVED_FIELDS[NegativeKeywordLevel(level)])

    def false_positive_avoided(self) -> None:
        self._bump("false_positives_avoided")

    def malformed_record(self) -> None:
        self._bump("malformed_records_skipped")

    def shared_list_checked(self) -> None:
        self._bump("shared_lists_checked")

    def shared_list_skipped(self) -> None:
        self._bump("shared_lists_skipped")


class ConflictDecision(BaseNGModel):
    """A negative keyword found to block a positive keyword."""

    level: NegativeKeywordLevel
    negative_text: str
    negative_match_type: str
    negative_criterion_id: str | None = None
    campaign_name: str = ""
    ad_group_name: str = ""
    shared_set_name: str = ""
    positive_text: str
    positive_match_type: str
    positive_campaign_name: str = ""
    positive_ad_group_name: str = ""
    action: ConflictAction


class AuditRunResult(BaseNGModel):
    """Everything an audit run hands to the reporting collaborator."""

    status: RunStatus = RunStatus.COMPLETED
    dry_run: bool = True
    metrics: ConflictMetrics = Field(default_factory=ConflictMetrics)
    decisions: list[ConflictDecision] = Field(default_factory=list)
    validation: ValidationReport | None = None
    warnings: list[str] = Field(default_factory=list)
    error: str | None = None
    correlation_id: str | None = None
    started_at: datetime = Field(default_factory=utc_now)
    finished_at: datetime | None = None

    def summary(self) -> dict[str, Any]:
        """Flat, serializable summary for reports and notifications."""
        return {
            "status": self.status,
            "dry_run": self.dry_run,
            **self.metrics.counts(),
            "total_conflicts_found": self.metrics.total_conflicts_found,
            "total_conflicts_removed": self.metrics.total_conflicts_removed,
            "keywords_indexed": self.metrics.keywords_indexed,
            "processing_cap_reached": self.metrics.processing_cap_reached,
            "malformed_records_skipped": self.metrics.malformed_records_skipped,
            "warnings": list(self.warnings),
        }
