"""Tests for run reporters."""

import logging

import pytest

from negativeguard.core.exceptions import PlatformOperationError
from negativeguard.models.metrics import AuditRunResult, ConflictMetrics, RunStatus
from negativeguard.reports.base import AuditReporter, LoggingReporter


@pytest.fixture
def result():
    """A completed dry run with conflicts at two levels."""
    return AuditRunResult(
        dry_run=True,
        metrics=ConflictMetrics(
            ad_group_conflicts_found=2,
            shared_list_conflicts_found=1,
            false_positives_avoided=4,
            keywords_indexed=120,
            shared_lists_checked=1,
            shared_lists_skipped=2,
        ),
        warnings=["Processing cap of 100 keywords reached; conflict results are partial"],
    )


class TestAuditReporter:
    """Test the reporter interface."""

    def test_cannot_instantiate_abstract(self):
        """Test both hooks must be implemented."""
        with pytest.raises(TypeError):
            AuditReporter()


class TestLoggingReporter:
    """Test the default reporter."""

    def test_report_logs_summary(self, result, caplog):
        """Test totals and per-level counts are logged."""
        reporter = LoggingReporter("test.reporter")

        with caplog.at_level(logging.INFO, logger="test.reporter"):
            reporter.report(result)

        assert (
            "[DRY RUN] Negative keyword audit COMPLETED: 3 conflicts found, 0 removed, "
            "4 false positives avoided, 120 keywords indexed"
        ) in caplog.text
        assert "Ad group conflicts: 2 found, 0 removed" in caplog.text
        assert "Shared list conflicts: 1 found, 0 removed" in caplog.text
        assert "skipped (not applied to any campaign): 2" in caplog.text

    def test_report_logs_warnings(self, result, caplog):
        """Test run warnings are logged at WARNING."""
        reporter = LoggingReporter("test.reporter")

        with caplog.at_level(logging.INFO, logger="test.reporter"):
            reporter.report(result)

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "Processing cap of 100 keywords" in warnings[0].getMessage()

    def test_report_failure(self, result, caplog):
        """Test aborted runs log the error and partial counts."""
        result.status = RunStatus.ABORTED
        reporter = LoggingReporter("test.reporter")

        with caplog.at_level(logging.INFO, logger="test.reporter"):
            reporter.report_failure(PlatformOperationError("quota gone"), result)

        assert caplog.records[-1].levelno == logging.ERROR
        assert "aborted: quota gone (3 conflicts found" in caplog.text

    def test_default_logger_name(self):
        """Test the logger is named after the reporter class."""
        assert LoggingReporter().logger.name == "negativeguard.reports.base.LoggingReporter"
