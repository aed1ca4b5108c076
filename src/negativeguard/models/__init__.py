"""Data models for NegativeGuard."""

from negativeguard.models.keyword import (
    KeywordMatchType,
    NegativeKeywordLevel,
    NegativeKeywordRecord,
    PositiveKeywordRecord,
    SharedNegativeList,
    normalize_keyword_text,
)
from negativeguard.models.metrics import (
    AuditRunResult,
    ConflictAction,
    ConflictDecision,
    ConflictMetrics,
    MetricsRecorder,
    RunStatus,
)
from negativeguard.models.validation import (
    ValidationCase,
    ValidationCaseResult,
    ValidationReport,
)

__all__ = [
    "AuditRunResult",
    "ConflictAction",
    "ConflictDecision",
    "ConflictMetrics",
    "KeywordMatchType",
    "MetricsRecorder",
    "NegativeKeywordLevel",
    "NegativeKeywordRecord",
    "PositiveKeywordRecord",
    "RunStatus",
    "SharedNegativeList",
    "ValidationCase",
    "ValidationCaseResult",
    "ValidationReport",
    "normalize_keyword_text",
]
