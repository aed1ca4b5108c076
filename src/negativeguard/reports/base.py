"""Reporting collaborators notified at the end of an audit run."""

import logging
from abc import ABC, abstractmethod

from negativeguard.models.metrics import AuditRunResult

_LEVEL_LABELS = (
    ("Ad group", "ad_group"),
    ("Campaign", "campaign"),
    ("Shared list", "shared_list"),
)


class AuditReporter(ABC):
    """Receives the outcome of every audit run, successful or not."""

    @abstractmethod
    def report(self, result: AuditRunResult) -> None:
        """Deliver the summary of a completed run."""
        pass

    @abstractmethod
    def report_failure(self, error: Exception, result: AuditRunResult) -> None:
        """Deliver notice of an aborted run with whatever was gathered so far."""
        pass


class LoggingReporter(AuditReporter):
    """Writes run summaries to the log."""

    def __init__(self, logger_name: str | None = None):
        self.logger = logging.getLogger(logger_name or f"{__name__}.{self.__class__.__name__}")

    def report(self, result: AuditRunResult) -> None:
        metrics = result.metrics
        mode = "DRY RUN" if result.dry_run else "LIVE"

        self.logger.info(
            f"[{mode}] Negative keyword audit {result.status}: "
            f"{metrics.total_conflicts_found} conflicts found, "
            f"{metrics.total_conflicts_removed} removed, "
            f"{metrics.false_positives_avoided} false positives avoided, "
            f"{metrics.keywords_indexed} keywords indexed"
        )
        for label, prefix in _LEVEL_LABELS:
            found = getattr(metrics, f"{prefix}_conflicts_found")
            removed = getattr(metrics, f"{prefix}_conflicts_removed")
            self.logger.info(f"  {label} conflicts: {found} found, {removed} removed")

        if metrics.shared_lists_skipped:
            self.logger.info(
                f"  Shared lists checked: {metrics.shared_lists_checked}, "
                f"skipped (not applied to any campaign): {metrics.shared_lists_skipped}"
            )
        for warning in result.warnings:
            self.logger.warning(f"  {warning}")

    def report_failure(self, error: Exception, result: AuditRunResult) -> None:
        self.logger.error(
            f"Negative keyword audit aborted: {error} "
            f"({result.metrics.total_conflicts_found} conflicts found and "
            f"{result.metrics.total_conflicts_removed} removed before the failure)"
        )
