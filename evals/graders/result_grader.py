"""
Result Grader -- deterministic checks over engine output.

Use for: invariants every ValidationResult must satisfy regardless of input
(bounded confidence, status thresholds, domain downgrade direction). Fast,
cheap, reproducible.

Usage:
    grader = ResultGrader.for_validation("scenario_a")
    grader.add_check("supported", lambda r: r.status == ValidationStatus.SUPPORTED)
    outcome = grader.grade(result)
    assert outcome.passed, outcome.failures
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from framework_mapper.capability import CapabilityRole, ValidationResult, ValidationStatus
from framework_mapper.capability.alignment import QUESTIONABLE_THRESHOLD, SUPPORTED_THRESHOLD

logger = logging.getLogger(__name__)

MAX_EVIDENCE = 5


@dataclass
class GradeResult:
    """Outcome of grading one result."""

    eval_name: str
    passed: bool
    checks_passed: int = 0
    checks_total: int = 0
    failures: list[str] = field(default_factory=list)


def status_matches_confidence(result: ValidationResult) -> bool:
    c = result.confidence_score
    if result.status == ValidationStatus.SUPPORTED:
        return c >= SUPPORTED_THRESHOLD
    if result.status == ValidationStatus.QUESTIONABLE:
        return QUESTIONABLE_THRESHOLD <= c < SUPPORTED_THRESHOLD
    return c < QUESTIONABLE_THRESHOLD


def domain_only_downgrades(result: ValidationResult) -> bool:
    if result.effective_role == result.claimed_role:
        return not result.domain_adjusted
    return (
        result.claimed_role.is_implementation
        and result.effective_role == CapabilityRole.FACILITATES
        and result.domain_adjusted
    )


def gap_count_bounded(result: ValidationResult) -> bool:
    limit = 3 + (1 if result.domain_adjusted else 0)
    return len(result.gaps) <= limit


class ResultGrader:
    """Runs named check functions against an engine result."""

    def __init__(self, eval_name: str):
        self.eval_name = eval_name
        self._checks: list[tuple[str, Callable[[Any], bool]]] = []

    @classmethod
    def for_validation(cls, eval_name: str) -> "ResultGrader":
        """Grader preloaded with the invariants every ValidationResult must hold."""
        return (
            cls(eval_name)
            .add_check("confidence_in_range", lambda r: 0 <= r.confidence_score <= 100)
            .add_check("status_matches_confidence", status_matches_confidence)
            .add_check("domain_only_downgrades", domain_only_downgrades)
            .add_check("evidence_bounded", lambda r: len(r.evidence) <= MAX_EVIDENCE)
            .add_check("gaps_bounded", gap_count_bounded)
            .add_check("feedback_headline", lambda r: r.feedback.startswith(r.status.value))
        )

    def add_check(self, name: str, check_fn: Callable[[Any], bool]) -> "ResultGrader":
        """Add a named check function. Returns self for chaining."""
        self._checks.append((name, check_fn))
        return self

    def grade(self, output: Any) -> GradeResult:
        failures = []
        passed_count = 0
        for name, check_fn in self._checks:
            if check_fn(output):
                passed_count += 1
            else:
                failures.append(f"FAIL: {name}")

        if failures:
            logger.debug(f"[ResultGrader] {self.eval_name}: {failures}")
        return GradeResult(
            eval_name=self.eval_name,
            passed=not failures,
            checks_passed=passed_count,
            checks_total=len(self._checks),
            failures=failures,
        )
