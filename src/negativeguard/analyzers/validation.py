"""Regression suite that gates audit runs on known conflict verdicts."""

import logging

from negativeguard.analyzers.conflict_predicate import has_keyword_conflict
from negativeguard.models.keyword import KeywordMatchType
from negativeguard.models.validation import (
    ValidationCase,
    ValidationCaseResult,
    ValidationReport,
)

logger = logging.getLogger(__name__)


def _case(negative, match_type, positive, expected, description) -> ValidationCase:
    return ValidationCase(
        negative_text=negative,
        negative_match_type=match_type.value,
        positive_text=positive,
        expected=expected,
        description=description,
    )


BROAD = KeywordMatchType.BROAD
PHRASE = KeywordMatchType.PHRASE
EXACT = KeywordMatchType.EXACT

VALIDATION_CASES: tuple[ValidationCase, ...] = (
    # Substring hits the word-aware rules must reject
    _case("ed", BROAD, "edwards gsx750", False, "broad term inside a longer word"),
    _case("ac", PHRASE, "nash sc 6 vacuum pump", False, "short phrase inside 'vacuum'"),
    _case("kd", PHRASE, "kinney kdp", False, "short phrase as a word prefix"),
    _case("a c", PHRASE, "liquid ring ammonia compressor", False, "phrase spanning word fragments"),
    _case("mini", PHRASE, "mining vacuum pump", False, "phrase as a word prefix"),
    _case("ed", PHRASE, "medical liquid ring pump", False, "short phrase inside 'medical'"),
    _case("busch", EXACT, "busch dolphin la", False, "exact negative on a longer keyword"),
    _case("pump repair", BROAD, "vacuum pump", False, "broad needs every term present"),
    _case("vacuum pump", PHRASE, "pump vacuum oil", False, "phrase word order matters"),
    # Real conflicts that must still be caught
    _case("medical", BROAD, "medical liquid ring pump", True, "broad single whole word"),
    _case("r5 ra", PHRASE, "busch r5 ra 0025", True, "phrase as contiguous words"),
    _case("busch dolphin la", EXACT, "busch dolphin la", True, "exact full match"),
    _case("+used +pump", BROAD, "used vacuum pump", True, "broad modifier markers ignored"),
    _case("pump repair", BROAD, "repair of vacuum pump", True, "broad terms in any order"),
    _case("sc", BROAD, "nash sc 6 vacuum pump", True, "short broad term as a whole word"),
    _case("liquid ring", PHRASE, "medical liquid ring pump", True, "phrase in the middle"),
)


def run_validation_suite(
    cases: tuple[ValidationCase, ...] | list[ValidationCase] = VALIDATION_CASES,
) -> ValidationReport:
    """Run the conflict check over every labeled case.

    Positives are treated as broad match for these checks.

    Args:
        cases: Cases to run, the built-in suite by default

    Returns:
        ValidationReport with per-case results; ``all_passed`` is the gate
    """
    results = []
    for case in cases:
        actual = has_keyword_conflict(
            case.negative_text,
            case.negative_match_type,
            case.positive_text,
            KeywordMatchType.BROAD,
        )
        result = ValidationCaseResult(case=case, actual=actual)
        if not result.passed:
            logger.error(
                f"Validation failed: {case.negative_match_type} negative "
                f"'{case.negative_text}' vs '{case.positive_text}' "
                f"expected {case.expected}, got {actual} ({case.description})"
            )
        results.append(result)

    report = ValidationReport(results=results)
    logger.info(
        f"Conflict validation: {report.passed_tests}/{report.total_tests} passed, "
        f"{report.failed_tests} failed"
    )
    return report
