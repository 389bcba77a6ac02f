"""
AlignmentScorer -- reconciles claimed, effective and detected roles into a verdict.

Three-way comparison, first match wins:

  claimed == detected    alignment = detected confidence
  effective == detected  alignment = max(confidence - 20, 30)
  otherwise              alignment = max(confidence - 40, 10)

A domain adjustment then costs a further 20 points (floored at 0) and puts a
domain gap and recommendation at the front of the lists. Status is read off
the final, post-penalty confidence so the thresholds always agree with the
number the caller sees.
"""

import logging

from .models import (
    AlignmentResult,
    CapabilityRole,
    DomainValidation,
    ValidationStatus,
)
from .tables import ROLE_DESCRIPTIONS, ROLE_RECOMMENDATIONS

logger = logging.getLogger(__name__)

SUPPORTED_THRESHOLD = 70
QUESTIONABLE_THRESHOLD = 40
ADJUSTED_MATCH_PENALTY = 20
ADJUSTED_MATCH_FLOOR = 30
MISMATCH_PENALTY = 40
MISMATCH_FLOOR = 10
DOMAIN_PENALTY = 20
MAX_PRIMARY_GAPS = 3


def status_for(confidence: int) -> ValidationStatus:
    if confidence >= SUPPORTED_THRESHOLD:
        return ValidationStatus.SUPPORTED
    if confidence >= QUESTIONABLE_THRESHOLD:
        return ValidationStatus.QUESTIONABLE
    return ValidationStatus.UNSUPPORTED


class AlignmentScorer:
    """Turns role comparisons into status, confidence and narrative lists."""

    def score(
        self,
        claimed: CapabilityRole,
        effective: CapabilityRole,
        detected: CapabilityRole,
        detected_confidence: int,
        domain: DomainValidation | None = None,
        quality_gaps: list[str] | None = None,
        subject: str = "this safeguard",
    ) -> AlignmentResult:
        gaps: list[str] = []
        strengths: list[str] = []
        recommendations: list[str] = []

        if claimed == detected:
            alignment = detected_confidence
            strengths.append(
                f"Claimed {claimed.label} capability matches the detected role"
            )
        elif effective == detected:
            alignment = max(detected_confidence - ADJUSTED_MATCH_PENALTY, ADJUSTED_MATCH_FLOOR)
            gaps.append(
                f"Original {claimed.label} claim does not match the detected "
                f"{detected.label} role"
            )
            strengths.append(
                f"Adjusted {effective.label} role matches the detected role"
            )
        else:
            alignment = max(detected_confidence - MISMATCH_PENALTY, MISMATCH_FLOOR)
            gaps.append(
                f"Claimed {claimed.label} capability is not supported: the tool "
                f"appears to {ROLE_DESCRIPTIONS[detected]} ({detected.label})"
            )
            recommendations.append(
                f"Consider re-classifying the claim as {detected.label}"
            )

        recommendations.append(ROLE_RECOMMENDATIONS[effective].format(title=subject))
        gaps = (gaps + list(quality_gaps or []))[:MAX_PRIMARY_GAPS]

        confidence = alignment
        if domain is not None and domain.adjusted:
            confidence = max(alignment - DOMAIN_PENALTY, 0)
            gaps.insert(0, domain.reasoning)
            required = " or ".join(domain.required_tool_types) or "domain-appropriate"
            recommendations.insert(
                0,
                f"Reposition the tool as {CapabilityRole.FACILITATES.label} for "
                f"{domain.domain_name or subject}, or provide evidence of {required} "
                f"tool capabilities",
            )

        confidence = max(0, min(100, confidence))
        status = status_for(confidence)
        logger.debug(
            f"[AlignmentScorer] claimed={claimed.label} effective={effective.label} "
            f"detected={detected.label} alignment={alignment} final={confidence} "
            f"-> {status.value}"
        )
        return AlignmentResult(
            status=status,
            confidence=confidence,
            alignment=alignment,
            gaps=gaps,
            strengths=strengths,
            recommendations=recommendations,
        )
