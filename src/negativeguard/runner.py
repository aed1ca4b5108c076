"""Run coordinator for the negative keyword audit."""

import logging

from negativeguard.analyzers.keyword_index import PositiveKeywordIndex
from negativeguard.analyzers.scope_resolvers import (
    AdGroupScopeResolver,
    CampaignScopeResolver,
    SharedListScopeResolver,
)
from negativeguard.analyzers.validation import run_validation_suite
from negativeguard.core.config import AuditConfig
from negativeguard.core.exceptions import (
    ConflictDetectionError,
    NegativeGuardError,
    ValidationFailureError,
)
from negativeguard.core.logging_utils import set_correlation_id
from negativeguard.data_providers.base import KeywordDataProvider
from negativeguard.models.base import utc_now
from negativeguard.models.metrics import (
    AuditRunResult,
    MetricsRecorder,
    RunStatus,
)
from negativeguard.reports.base import AuditReporter, LoggingReporter

logger = logging.getLogger(__name__)

RESOLVER_ORDER = (
    AdGroupScopeResolver,
    CampaignScopeResolver,
    SharedListScopeResolver,
)


class RunCoordinator:
    """Runs one audit: validation gate, positive index, then each scope in turn.

    Every run is self-contained. The coordinator owns the run's metrics and
    hands resolvers an increment-only recorder; the index is built once and
    shared read-only by all three resolvers.
    """

    def __init__(
        self,
        data_provider: KeywordDataProvider,
        config: AuditConfig | None = None,
        reporter: AuditReporter | None = None,
    ):
        self.data_provider = data_provider
        self.config = config or AuditConfig()
        self.reporter = reporter or LoggingReporter()

    def run(self, correlation_id: str | None = None) -> AuditRunResult:
        """Execute the audit.

        Args:
            correlation_id: Id stamped on every log record of this run;
                generated when omitted

        Returns:
            AuditRunResult with COMPLETED status

        Raises:
            ValidationFailureError: If the regression suite fails in dry run
            APIError: If a platform call fails; removals already made stay made
            ConflictDetectionError: For any other failure during the run
        """
        result = AuditRunResult(
            dry_run=self.config.dry_run,
            correlation_id=set_correlation_id(correlation_id),
        )
        mode = "DRY RUN" if self.config.dry_run else "LIVE"
        logger.info(f"Starting negative keyword audit ({mode})")

        try:
            self._validate(result)
            index = self._build_index(result)
            recorder = MetricsRecorder(result.metrics)

            for resolver_cls in RESOLVER_ORDER:
                resolver = resolver_cls(
                    index,
                    recorder,
                    self.data_provider,
                    dry_run=self.config.dry_run,
                    detailed_logging=self.config.detailed_logging,
                )
                result.decisions.extend(resolver.run())
        except NegativeGuardError as e:
            self._abort(e, result)
            raise
        except Exception as e:
            error = ConflictDetectionError(f"Audit run failed: {e}")
            self._abort(error, result)
            raise error from e

        result.finished_at = utc_now()
        logger.info(
            f"Negative keyword audit complete: "
            f"{result.metrics.total_conflicts_found} conflicts found, "
            f"{result.metrics.total_conflicts_removed} removed"
        )
        self.reporter.report(result)
        return result

    def _validate(self, result: AuditRunResult) -> None:
        report = run_validation_suite()
        result.validation = report
        if report.all_passed:
            return

        message = (
            f"Conflict validation failed: {report.failed_tests} of "
            f"{report.total_tests} cases"
        )
        if self.config.dry_run:
            raise ValidationFailureError(message, report=report)

        logger.warning(f"{message}; continuing because the run is live")
        result.warnings.append(message)

    def _build_index(self, result: AuditRunResult) -> PositiveKeywordIndex:
        index = PositiveKeywordIndex.build(
            self.data_provider.list_active_positive_keywords(self.config.date_range),
            max_keywords=self.config.max_keywords_to_process,
        )

        metrics = result.metrics
        metrics.keywords_indexed = len(index)
        metrics.processing_cap_reached = index.truncated
        metrics.malformed_records_skipped += index.skipped_records

        if index.truncated:
            result.warnings.append(
                f"Processing cap of {self.config.max_keywords_to_process} keywords "
                "reached; conflict results are partial"
            )
        return index

    def _abort(self, error: Exception, result: AuditRunResult) -> None:
        result.status = RunStatus.ABORTED
        result.error = str(error)
        result.finished_at = utc_now()
        logger.error(f"Negative keyword audit aborted: {error}")
        self.reporter.report_failure(error, result)
