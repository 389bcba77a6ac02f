"""
CapabilityEngine -- single-pass detect -> classify -> assess -> domain -> reconcile.

The three lexical stages sit behind narrow protocols so any one of them can be
replaced (e.g. by a different matching technique) without touching callers:

  ToolTypeStrategy            text x safeguard id -> tool category
  RoleClassificationStrategy  text x safeguard    -> ClassificationResult
  QualityStrategy             text x safeguard x role -> QualityAssessment

Every stage is total. Under-specified text degrades to "unknown" /
FACILITATES / low confidence instead of raising.
"""

import logging
import re
from typing import Protocol, runtime_checkable

from .alignment import AlignmentScorer
from .classifier import CapabilityClassifier
from .domain import DomainValidator
from .models import (
    CapabilityRole,
    ClassificationResult,
    QualityAssessment,
    Safeguard,
    ValidationResult,
    VendorAnalysis,
)
from .quality import CapabilityQualityAssessor
from .scoring import matched_phrases
from .tables import QUALITY_DESCRIPTIONS, RECOMMENDED_USE, ROLE_DESCRIPTIONS
from .tool_type import ToolTypeDetector

logger = logging.getLogger(__name__)

MAX_EVIDENCE = 5
MIN_SENTENCE_LENGTH = 15
SENTENCE_SPLIT = re.compile(r"[.!?]+")


# =============================================================================
# STRATEGY PROTOCOLS
# =============================================================================


@runtime_checkable
class ToolTypeStrategy(Protocol):
    """Infers the tool category a text describes."""

    def detect(self, text: str, safeguard_id: str | None = None) -> str:
        ...


@runtime_checkable
class RoleClassificationStrategy(Protocol):
    """Infers the capability role a text evidences."""

    def classify(self, text: str, safeguard: Safeguard) -> ClassificationResult:
        ...


@runtime_checkable
class QualityStrategy(Protocol):
    """Rates how well a text evidences a role."""

    def assess_quality(
        self, text: str, safeguard: Safeguard, role: CapabilityRole
    ) -> QualityAssessment:
        ...


# =============================================================================
# EVIDENCE
# =============================================================================


def extract_evidence(
    text: str,
    signal_evidence: list[str],
    phrases: list[str],
    limit: int = MAX_EVIDENCE,
) -> list[str]:
    """Signal evidence first, then sentences mentioning a matched phrase."""
    evidence = list(dict.fromkeys(signal_evidence))[:limit]
    if len(evidence) >= limit or not phrases:
        return evidence

    for raw in SENTENCE_SPLIT.split(text):
        sentence = raw.strip()
        if len(sentence) <= MIN_SENTENCE_LENGTH or sentence in evidence:
            continue
        if matched_phrases(sentence, phrases):
            evidence.append(sentence)
            if len(evidence) >= limit:
                break
    return evidence


# =============================================================================
# ENGINE
# =============================================================================


class CapabilityEngine:
    """Runs the capability pipeline for one request at a time.

    Holds no per-request state, so one instance can serve concurrent callers.

    Usage:
        engine = CapabilityEngine()
        result = engine.validate_mapping("Acme", safeguard, CapabilityRole.FULL, text)
        result.status, result.confidence_score
    """

    def __init__(
        self,
        tool_type_detector: ToolTypeStrategy | None = None,
        classifier: RoleClassificationStrategy | None = None,
        quality_assessor: QualityStrategy | None = None,
        domain_validator: DomainValidator | None = None,
        alignment_scorer: AlignmentScorer | None = None,
    ):
        self.tool_type_detector = tool_type_detector or ToolTypeDetector()
        self.classifier = classifier or CapabilityClassifier()
        self.quality_assessor = quality_assessor or CapabilityQualityAssessor()
        self.domain_validator = domain_validator or DomainValidator()
        self.alignment_scorer = alignment_scorer or AlignmentScorer()

    def analyze(
        self,
        vendor_name: str,
        safeguard: Safeguard,
        response_text: str,
        include_additional_roles: bool = False,
    ) -> VendorAnalysis:
        """Detect the role a vendor response supports, with no claim to check."""
        tool_type = self.tool_type_detector.detect(response_text, safeguard.id)
        classification = self.classifier.classify(response_text, safeguard)
        role = classification.role
        qa = self.quality_assessor.assess_quality(response_text, safeguard, role)

        evidence = extract_evidence(
            response_text, qa.evidence, qa.matched_phrases + list(safeguard.keywords)
        )
        extra = classification.additional_roles() if include_additional_roles else []
        title = safeguard.title or safeguard.id

        logger.info(
            f"[CapabilityEngine] analyze {vendor_name} / {safeguard.id}: "
            f"{role.label} ({qa.quality}, {qa.confidence}%) tool={tool_type}"
        )
        return VendorAnalysis(
            vendor=vendor_name,
            safeguard_id=safeguard.id,
            safeguard_title=safeguard.title,
            role=role,
            confidence=qa.confidence,
            quality=qa.quality,
            reasoning=f"Primary capability: {role.label} ({qa.quality} quality)",
            evidence=tuple(evidence),
            gaps=tuple(qa.gaps),
            detected_tool_type=tool_type,
            tool_capability_description=(
                f"This tool {ROLE_DESCRIPTIONS[role]} with "
                f"{QUALITY_DESCRIPTIONS[qa.quality]} capabilities."
            ),
            recommended_use=RECOMMENDED_USE[role].format(title=title),
            additional_roles=tuple(extra),
        )

    def validate_mapping(
        self,
        vendor_name: str,
        safeguard: Safeguard,
        claimed_role: CapabilityRole,
        supporting_text: str,
        include_additional_roles: bool = False,
    ) -> ValidationResult:
        """Check a vendor's claimed role against what the text supports."""
        tool_type = self.tool_type_detector.detect(supporting_text, safeguard.id)
        classification = self.classifier.classify(supporting_text, safeguard)
        detected = classification.role
        qa = self.quality_assessor.assess_quality(supporting_text, safeguard, detected)

        domain = self.domain_validator.validate_domain(safeguard.id, claimed_role, tool_type)
        title = safeguard.title or safeguard.id
        alignment = self.alignment_scorer.score(
            claimed_role,
            domain.effective_role,
            detected,
            qa.confidence,
            domain=domain,
            quality_gaps=qa.gaps,
            subject=title,
        )

        strengths = list(alignment.strengths)
        if qa.quality in ("excellent", "good"):
            strengths.append(f"{qa.quality.capitalize()} evidence quality for {detected.label}")
        evidence = extract_evidence(
            supporting_text, qa.evidence, qa.matched_phrases + list(safeguard.keywords)
        )
        extra = classification.additional_roles() if include_additional_roles else []

        feedback = compose_feedback(
            status=alignment.status.value,
            claimed=claimed_role,
            safeguard_id=safeguard.id,
            confidence=alignment.confidence,
            domain_reasoning=domain.reasoning if domain.adjusted else "",
            strengths=strengths,
            gaps=alignment.gaps,
            recommendations=alignment.recommendations,
        )

        logger.info(
            f"[CapabilityEngine] validate {vendor_name} / {safeguard.id}: "
            f"claimed={claimed_role.label} detected={detected.label} "
            f"tool={tool_type} -> {alignment.status.value} ({alignment.confidence}%)"
        )
        return ValidationResult(
            vendor=vendor_name,
            safeguard_id=safeguard.id,
            safeguard_title=safeguard.title,
            claimed_role=claimed_role,
            effective_role=domain.effective_role,
            detected_role=detected,
            detected_tool_type=tool_type,
            domain_match=domain.domain_match,
            domain_adjusted=domain.adjusted,
            domain_reasoning=domain.reasoning,
            required_tool_types=tuple(domain.required_tool_types),
            alignment_score=alignment.alignment,
            confidence_score=alignment.confidence,
            status=alignment.status,
            quality=qa.quality,
            evidence=tuple(evidence),
            gaps=tuple(alignment.gaps),
            strengths=tuple(strengths),
            recommendations=tuple(alignment.recommendations),
            feedback=feedback,
            additional_roles=tuple(extra),
        )


def compose_feedback(
    status: str,
    claimed: CapabilityRole,
    safeguard_id: str,
    confidence: int,
    domain_reasoning: str,
    strengths: list[str],
    gaps: list[str],
    recommendations: list[str],
) -> str:
    lines = [
        f"{status}: {claimed.label} capability claim for {safeguard_id} "
        f"({confidence}% confidence)"
    ]
    if domain_reasoning:
        lines.append(domain_reasoning)
    for heading, items in (
        ("Strengths", strengths),
        ("Gaps", gaps),
        ("Recommendations", recommendations),
    ):
        if items:
            lines.append(f"{heading}:")
            lines.extend(f"- {item}" for item in items)
    return "\n".join(lines)
