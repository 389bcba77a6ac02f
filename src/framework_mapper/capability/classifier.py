"""
CapabilityClassifier -- infers which capability role a text actually evidences.

Four indicator groups are scored with the same fold (scoring.keyword_score):
direct implementation (curated per safeguard), governance, facilitation and
validation. The decision rule is evaluated in fixed priority order:

    implementation > 0.2 and >= every other group   -> FULL (> 0.5) or PARTIAL
    governance     > 0.2 and >= facilitation, validation -> GOVERNANCE
    validation     > 0.2 and >= facilitation        -> VALIDATES
    otherwise                                        -> FACILITATES

The last branch is reported as Detected(FACILITATES) when facilitation
language cleared the threshold, and as NoSignal when nothing did.
"""

import logging
from collections.abc import Mapping

from .models import (
    CapabilityRole,
    ClassificationResult,
    Detected,
    NoSignal,
    Safeguard,
)
from .scoring import keyword_score
from .tables import (
    FULL_THRESHOLD,
    IMPLEMENTATION_INDICATORS,
    ROLE_INDICATORS,
    ROLE_THRESHOLD,
)

logger = logging.getLogger(__name__)


class CapabilityClassifier:
    """Table-driven role classifier.

    Both tables can be swapped in for testing or tuning; the defaults are the
    module-level tables in ``capability.tables``.
    """

    def __init__(
        self,
        implementation_indicators: Mapping[str, tuple[str, ...]] = IMPLEMENTATION_INDICATORS,
        role_indicators: Mapping[CapabilityRole, tuple[str, ...]] = ROLE_INDICATORS,
        threshold: float = ROLE_THRESHOLD,
        full_threshold: float = FULL_THRESHOLD,
    ):
        self._implementation = implementation_indicators
        self._roles = role_indicators
        self._threshold = threshold
        self._full_threshold = full_threshold

    def classify(self, text: str, safeguard: Safeguard) -> ClassificationResult:
        impl = keyword_score(text, self._implementation.get(safeguard.id, ()))
        gov = keyword_score(text, self._roles[CapabilityRole.GOVERNANCE])
        fac = keyword_score(text, self._roles[CapabilityRole.FACILITATES])
        val = keyword_score(text, self._roles[CapabilityRole.VALIDATES])

        outcome = self._decide(impl, gov, fac, val)
        result = ClassificationResult(
            outcome=outcome,
            implementation_score=impl,
            governance_score=gov,
            facilitation_score=fac,
            validation_score=val,
        )
        logger.debug(
            f"[CapabilityClassifier] {safeguard.id}: impl={impl:.3f} gov={gov:.3f} "
            f"fac={fac:.3f} val={val:.3f} -> {result.role.label}"
            f"{' (no signal)' if result.is_fallback else ''}"
        )
        return result

    def _decide(self, impl: float, gov: float, fac: float, val: float) -> Detected | NoSignal:
        t = self._threshold
        if impl > t and impl >= max(fac, gov, val):
            if impl > self._full_threshold:
                return Detected(CapabilityRole.FULL)
            return Detected(CapabilityRole.PARTIAL)
        if gov > t and gov >= max(fac, val):
            return Detected(CapabilityRole.GOVERNANCE)
        if val > t and val >= fac:
            return Detected(CapabilityRole.VALIDATES)
        if fac > t:
            return Detected(CapabilityRole.FACILITATES)
        return NoSignal()
