"""
ToolTypeDetector -- infers what kind of product a vendor text describes.

Each category in TOOL_TYPE_SIGNATURES scores 3 per distinct primary phrase and
1 per distinct secondary phrase found in the text, plus a flat +1 when the
safeguard is in the category's context affinity set. The highest score wins;
anything below MIN_TOOL_TYPE_SCORE is "unknown".
"""

import logging

from .models import UNKNOWN_TOOL_TYPE, ToolCategorySignature
from .scoring import weighted_score
from .tables import CONTEXT_AFFINITY_BONUS, MIN_TOOL_TYPE_SCORE, TOOL_TYPE_SIGNATURES

logger = logging.getLogger(__name__)


class ToolTypeDetector:
    """Lexical tool-category detector.

    Usage:
        detector = ToolTypeDetector()
        detector.detect("Our CMDB tracks every asset", safeguard_id="1.1")
        # -> "inventory"

    Ties go to the category defined first in the signature table.
    """

    def __init__(
        self,
        signatures: tuple[ToolCategorySignature, ...] = TOOL_TYPE_SIGNATURES,
        min_score: int = MIN_TOOL_TYPE_SCORE,
    ):
        self._signatures = signatures
        self._min_score = min_score

    def score_all(self, text: str, safeguard_id: str | None = None) -> dict[str, int]:
        """Score every category, in table order."""
        scores: dict[str, int] = {}
        for sig in self._signatures:
            score = weighted_score(
                text,
                sig.primary_keywords,
                sig.secondary_keywords,
                sig.primary_weight,
                sig.secondary_weight,
            )
            if safeguard_id and safeguard_id in sig.context_affinity:
                score += CONTEXT_AFFINITY_BONUS
            scores[sig.category] = score
        return scores

    def detect(self, text: str, safeguard_id: str | None = None) -> str:
        scores = self.score_all(text, safeguard_id)

        best_type = UNKNOWN_TOOL_TYPE
        best_score = 0
        for category, score in scores.items():
            # Strict comparison: the earlier category keeps a tie
            if score > best_score:
                best_type, best_score = category, score

        if best_score < self._min_score:
            logger.debug(
                f"[ToolTypeDetector] Best score {best_score} below {self._min_score}, "
                f"reporting {UNKNOWN_TOOL_TYPE}"
            )
            return UNKNOWN_TOOL_TYPE

        logger.debug(f"[ToolTypeDetector] Detected {best_type} (score={best_score})")
        return best_type
