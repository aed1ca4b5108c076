"""Models for the conflict regression suite."""

from pydantic import ConfigDict, Field

from negativeguard.models.base import BaseNGModel


class ValidationCase(BaseNGModel):
    """One labeled (negative, positive) pair with its expected verdict."""

    model_config = ConfigDict(frozen=True)

    negative_text: str
    negative_match_type: str
    positive_text: str
    expected: bool
    description: str


class ValidationCaseResult(BaseNGModel):
    """Outcome of running the predicate on one ValidationCase."""

    case: ValidationCase
    actual: bool

    @property
    def passed(self) -> bool:
        return self.actual == self.case.expected


class ValidationReport(BaseNGModel):
    """Pass/fail totals for a regression suite run."""

    results: list[ValidationCaseResult] = Field(default_factory=list)

    @property
    def total_tests(self) -> int:
        return len(self.results)

    @property
    def passed_tests(self) -> int:
        return sum(1 for result in self.results if result.passed)

    @property
    def failed_tests(self) -> int:
        return self.total_tests - self.passed_tests

    @property
    def all_passed(self) -> bool:
        return self.failed_tests == 0

    @property
    def failures(self) -> list[ValidationCaseResult]:
        return [result for result in self.results if not result.passed]
