"""Structured logging utilities for audit runs."""

import logging
import uuid
from contextvars import ContextVar
from typing import Any, MutableMapping, Optional

# One correlation id per audit run
run_id_var: ContextVar[Optional[str]] = ContextVar("run_id", default=None)

DECISION_FIELDS = (
    "scope",
    "negative_text",
    "negative_match_type",
    "positive_text",
    "action",
)


def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    """Set the correlation ID for the current audit run.

    Args:
        correlation_id: The correlation ID to set. If None, a new one is generated.

    Returns:
        The correlation ID that was set.
    """
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())
    run_id_var.set(correlation_id)
    return correlation_id


def get_correlation_id() -> Optional[str]:
    """Get the correlation ID of the running audit, if any."""
    return run_id_var.get()


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that merges adapter context and the run id into ``extra``."""

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> tuple[str, MutableMapping[str, Any]]:
        extra = dict(self.extra or {})
        extra.update(kwargs.get("extra", {}))

        correlation_id = get_correlation_id()
        if correlation_id:
            extra["correlation_id"] = correlation_id

        kwargs["extra"] = extra
        return msg, kwargs

    def decision(self, level: int, msg: str, **fields: Any) -> None:
        """Log a per-negative decision with the structured decision fields."""
        extra = {name: fields.get(name) for name in DECISION_FIELDS}
        self.log(level, msg, extra=extra)


def get_structured_logger(name: str, **context) -> StructuredLoggerAdapter:
    """Get a structured logger with context.

    Args:
        name: Logger name
        **context: Additional context to include in all log messages

    Returns:
        A structured logger adapter
    """
    return StructuredLoggerAdapter(logging.getLogger(name), context)


class CorrelationIDFilter(logging.Filter):
    """Logging filter that adds the run correlation ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = get_correlation_id() or "no-run"
        return True
