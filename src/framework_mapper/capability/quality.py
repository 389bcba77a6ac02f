"""
CapabilityQualityAssessor -- rates how well a text evidences a given role.

Each role family has a short list of fixed-increment signals (see
tables.QUALITY_SIGNALS). A signal fires when any of its phrases appears in the
text. The implementation roles also score tiered coverage of the safeguard's
core, sub-taxonomical and governance element lists (see
tables.QUALITY_ELEMENT_SIGNALS). Fired weights are summed and capped at 1.0.
"""

import logging
from collections.abc import Mapping

from .models import (
    CapabilityRole,
    ElementCoverageSignal,
    QualityAssessment,
    QualitySignal,
    Safeguard,
)
from .scoring import element_coverage, matched_phrases
from .tables import (
    IMPLEMENTATION_INDICATORS,
    QUALITY_BUCKETS,
    QUALITY_ELEMENT_SIGNALS,
    QUALITY_SIGNALS,
)

logger = logging.getLogger(__name__)

MAX_PHRASES_PER_EVIDENCE = 3


def quality_bucket(score: float) -> str:
    for floor, label in QUALITY_BUCKETS:
        if score >= floor:
            return label
    return "poor"


class CapabilityQualityAssessor:
    """Scores role-specific quality signals.

    Usage:
        assessor = CapabilityQualityAssessor()
        qa = assessor.assess_quality(text, safeguard, CapabilityRole.GOVERNANCE)
        qa.quality, qa.confidence  # -> "good", 70
    """

    def __init__(
        self,
        signals: Mapping[CapabilityRole, tuple[QualitySignal, ...]] = QUALITY_SIGNALS,
        implementation_indicators: Mapping[str, tuple[str, ...]] = IMPLEMENTATION_INDICATORS,
        element_signals: Mapping[
            CapabilityRole, tuple[ElementCoverageSignal, ...]
        ] = QUALITY_ELEMENT_SIGNALS,
    ):
        self._signals = signals
        self._implementation = implementation_indicators
        self._element_signals = element_signals

    def assess_quality(
        self, text: str, safeguard: Safeguard, role: CapabilityRole
    ) -> QualityAssessment:
        total = 0.0
        evidence: list[str] = []
        gaps: list[str] = []
        matched: list[str] = []

        for signal in self._signals[role]:
            found = matched_phrases(text, self._phrases_for(signal, safeguard))
            if found:
                total += signal.weight
                shown = ", ".join(found[:MAX_PHRASES_PER_EVIDENCE])
                evidence.append(f"{signal.evidence} ({shown})")
                matched.extend(p for p in found if p not in matched)
            elif signal.primary and signal.gap:
                gaps.append(signal.gap)

        for coverage_signal in self._element_signals.get(role, ()):
            elements = getattr(safeguard, coverage_signal.element_field)
            coverage, found = element_coverage(text, elements)
            for floor, weight, label in coverage_signal.tiers:
                if coverage > floor:
                    total += weight
                    evidence.append(f"{label} ({len(found)}/{len(elements)})")
                    matched.extend(p for p in found if p not in matched)
                    break

        score = round(min(total, 1.0), 2)
        quality = quality_bucket(score)
        logger.debug(
            f"[CapabilityQualityAssessor] {safeguard.id} as {role.label}: "
            f"score={score} quality={quality}"
        )
        return QualityAssessment(
            quality=quality,
            confidence=round(score * 100),
            evidence=evidence,
            gaps=gaps,
            matched_phrases=matched,
        )

    def _phrases_for(self, signal: QualitySignal, safeguard: Safeguard) -> tuple[str, ...]:
        if not signal.safeguard_specific:
            return signal.phrases
        curated = self._implementation.get(safeguard.id, ())
        return tuple(curated) + tuple(k.lower() for k in safeguard.keywords)
