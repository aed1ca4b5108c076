"""Tests for structured logging helpers."""

import logging

from negativeguard.core.logging_utils import (
    CorrelationIDFilter,
    StructuredLoggerAdapter,
    get_correlation_id,
    get_structured_logger,
    run_id_var,
    set_correlation_id,
)


class TestCorrelationId:
    """Test the per-run correlation id."""

    def test_generated_when_missing(self):
        """Test a UUID is generated when none is given."""
        token = run_id_var.set(None)
        try:
            correlation_id = set_correlation_id()
            assert len(correlation_id) == 36
            assert get_correlation_id() == correlation_id
        finally:
            run_id_var.reset(token)

    def test_explicit_id_kept(self):
        """Test an explicit id is used as is."""
        token = run_id_var.set(None)
        try:
            assert set_correlation_id("run-42") == "run-42"
            assert get_correlation_id() == "run-42"
        finally:
            run_id_var.reset(token)

    def test_filter_adds_id(self):
        """Test the filter stamps records with the current id or a placeholder."""
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)
        token = run_id_var.set(None)
        try:
            assert CorrelationIDFilter().filter(record) is True
            assert record.correlation_id == "no-run"
        finally:
            run_id_var.reset(token)


class TestStructuredLoggerAdapter:
    """Test the structured logger adapter."""

    def test_context_and_correlation_merged(self):
        """Test adapter context, call extras and the run id end up in extra."""
        token = run_id_var.set("run-7")
        try:
            adapter = get_structured_logger("test.adapter", scope="CAMPAIGN")
            msg, kwargs = adapter.process("hello", {"extra": {"action": "FLAGGED"}})
        finally:
            run_id_var.reset(token)

        assert isinstance(adapter, StructuredLoggerAdapter)
        assert msg == "hello"
        assert kwargs["extra"] == {
            "scope": "CAMPAIGN",
            "action": "FLAGGED",
            "correlation_id": "run-7",
        }

    def test_decision_sets_every_field(self, caplog):
        """Test decision logs carry all decision fields, None when not given."""
        adapter = get_structured_logger("test.decision")

        with caplog.at_level(logging.INFO, logger="test.decision"):
            adapter.decision(logging.INFO, "conflict", scope="AD_GROUP", negative_text="ed")

        record = caplog.records[-1]
        assert record.scope == "AD_GROUP"
        assert record.negative_text == "ed"
        assert record.positive_text is None
        assert record.action is None
