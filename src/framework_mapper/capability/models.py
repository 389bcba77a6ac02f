"""Data models for the capability classification engine.

Every result type is created fresh per request and never mutated after the
pipeline returns it. Enum values are the lowercase wire names used by the
HTTP and CLI surfaces.
"""

from dataclasses import dataclass, field
from enum import Enum


# =============================================================================
# ENUMS
# =============================================================================


class CapabilityRole(str, Enum):
    """The five capability roles a vendor tool can play for a safeguard."""

    FULL = "full"
    PARTIAL = "partial"
    FACILITATES = "facilitates"
    GOVERNANCE = "governance"
    VALIDATES = "validates"

    @property
    def is_implementation(self) -> bool:
        return self in (CapabilityRole.FULL, CapabilityRole.PARTIAL)

    @property
    def label(self) -> str:
        return self.value.upper()


class ValidationStatus(str, Enum):
    """Verdict on a claimed capability role."""

    SUPPORTED = "SUPPORTED"
    QUESTIONABLE = "QUESTIONABLE"
    UNSUPPORTED = "UNSUPPORTED"


UNKNOWN_TOOL_TYPE = "unknown"


# =============================================================================
# STATIC TABLE ROWS
# =============================================================================


@dataclass(frozen=True)
class ToolCategorySignature:
    """Keyword signature for one tool category.

    Attributes:
        category: Tool category name (e.g. "inventory").
        primary_keywords: Strong phrases, each worth ``primary_weight``.
        secondary_keywords: Supporting phrases, each worth ``secondary_weight``.
        context_affinity: Safeguard ids that get a flat +1 for this category.
    """

    category: str
    primary_keywords: tuple[str, ...]
    secondary_keywords: tuple[str, ...]
    context_affinity: frozenset[str] = frozenset()
    primary_weight: int = 3
    secondary_weight: int = 1


@dataclass(frozen=True)
class DomainRequirement:
    """Tool categories allowed to claim FULL/PARTIAL for a safeguard."""

    safeguard_id: str
    domain_name: str
    required_tool_types: frozenset[str]


@dataclass(frozen=True)
class QualitySignal:
    """One fixed-increment signal scanned by the quality assessor.

    ``safeguard_specific`` signals take their phrases from the safeguard
    being assessed instead of ``phrases``.
    """

    name: str
    phrases: tuple[str, ...]
    weight: float
    evidence: str
    gap: str | None = None
    primary: bool = False
    safeguard_specific: bool = False


@dataclass(frozen=True)
class ElementCoverageSignal:
    """Tiered signal on the share of a safeguard element list found in the text.

    ``tiers`` are (exclusive floor, weight, evidence), best tier first; only
    the first tier the coverage clears applies.
    """

    name: str
    element_field: str
    tiers: tuple[tuple[float, float, str], ...]


# =============================================================================
# SAFEGUARD (read-only view of the reference data)
# =============================================================================


@dataclass(frozen=True)
class Safeguard:
    """The slice of a safeguard record the engine reads."""

    id: str
    title: str = ""
    description: str = ""
    keywords: tuple[str, ...] = ()
    domain: str | None = None
    required_tool_types: frozenset[str] = frozenset()
    core_requirements: tuple[str, ...] = ()
    sub_taxonomical_elements: tuple[str, ...] = ()
    governance_elements: tuple[str, ...] = ()


# =============================================================================
# CLASSIFICATION
# =============================================================================


@dataclass(frozen=True)
class Detected:
    """A role cleared its indicator threshold."""

    role: CapabilityRole


@dataclass(frozen=True)
class NoSignal:
    """No indicator group cleared its threshold."""

    fallback: CapabilityRole = CapabilityRole.FACILITATES


@dataclass
class ClassificationResult:
    """Outcome of role classification plus the four raw group scores."""

    outcome: Detected | NoSignal
    implementation_score: float = 0.0
    governance_score: float = 0.0
    facilitation_score: float = 0.0
    validation_score: float = 0.0

    @property
    def role(self) -> CapabilityRole:
        if isinstance(self.outcome, Detected):
            return self.outcome.role
        return self.outcome.fallback

    @property
    def is_fallback(self) -> bool:
        return isinstance(self.outcome, NoSignal)

    @property
    def raw_score(self) -> float:
        """Score of the group that produced the role (0.0 for a fallback)."""
        if self.is_fallback:
            return 0.0
        return self.role_scores()[self.role]

    def role_scores(self) -> dict[CapabilityRole, float]:
        return {
            CapabilityRole.FULL: self.implementation_score,
            CapabilityRole.PARTIAL: self.implementation_score,
            CapabilityRole.GOVERNANCE: self.governance_score,
            CapabilityRole.FACILITATES: self.facilitation_score,
            CapabilityRole.VALIDATES: self.validation_score,
        }

    def additional_roles(self, threshold: float = 0.2) -> list[CapabilityRole]:
        """Other roles whose group score clears ``threshold``.

        Implementation evidence is reported once, as PARTIAL, unless the
        primary role is already FULL or PARTIAL.
        """
        extra = []
        primary = self.role
        if self.implementation_score > threshold and not primary.is_implementation:
            extra.append(CapabilityRole.PARTIAL)
        for role, score in (
            (CapabilityRole.GOVERNANCE, self.governance_score),
            (CapabilityRole.FACILITATES, self.facilitation_score),
            (CapabilityRole.VALIDATES, self.validation_score),
        ):
            if role != primary and score > threshold:
                extra.append(role)
        return extra


@dataclass
class QualityAssessment:
    """How well the text evidences the role it was classified as."""

    quality: str  # "excellent", "good", "fair", "poor"
    confidence: int
    evidence: list[str] = field(default_factory=list)
    gaps: list[str] = field(default_factory=list)
    matched_phrases: list[str] = field(default_factory=list)


@dataclass
class DomainValidation:
    """Whether a claimed role is domain-appropriate for the safeguard."""

    domain_match: bool
    effective_role: CapabilityRole
    adjusted: bool = False
    domain_name: str | None = None
    required_tool_types: list[str] = field(default_factory=list)
    tool_type_in_domain: bool | None = None
    reasoning: str = ""


@dataclass
class AlignmentResult:
    """Reconciled verdict from the alignment scorer."""

    status: ValidationStatus
    confidence: int
    alignment: int
    gaps: list[str] = field(default_factory=list)
    strengths: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


# =============================================================================
# OPERATION RESULTS
# =============================================================================


def _role_list(roles: list[CapabilityRole]) -> list[str]:
    return [r.value for r in roles]


@dataclass(frozen=True)
class ValidationResult:
    """Result of ``validate_mapping``. Built once, never mutated."""

    vendor: str
    safeguard_id: str
    safeguard_title: str
    claimed_role: CapabilityRole
    effective_role: CapabilityRole
    detected_role: CapabilityRole
    detected_tool_type: str
    domain_match: bool
    domain_adjusted: bool
    domain_reasoning: str
    required_tool_types: tuple[str, ...]
    alignment_score: int
    confidence_score: int
    status: ValidationStatus
    quality: str
    evidence: tuple[str, ...]
    gaps: tuple[str, ...]
    strengths: tuple[str, ...]
    recommendations: tuple[str, ...]
    feedback: str
    additional_roles: tuple[CapabilityRole, ...] = ()

    def to_dict(self) -> dict:
        return {
            "vendor": self.vendor,
            "safeguard_id": self.safeguard_id,
            "safeguard_title": self.safeguard_title,
            "claimed_role": self.claimed_role.value,
            "effective_role": self.effective_role.value,
            "detected_role": self.detected_role.value,
            "detected_tool_type": self.detected_tool_type,
            "domain_match": self.domain_match,
            "domain_adjusted": self.domain_adjusted,
            "domain_reasoning": self.domain_reasoning,
            "required_tool_types": list(self.required_tool_types),
            "alignment_score": self.alignment_score,
            "confidence_score": self.confidence_score,
            "status": self.status.value,
            "quality": self.quality,
            "evidence": list(self.evidence),
            "gaps": list(self.gaps),
            "strengths": list(self.strengths),
            "recommendations": list(self.recommendations),
            "feedback": self.feedback,
            "additional_roles": _role_list(list(self.additional_roles)),
        }


@dataclass(frozen=True)
class VendorAnalysis:
    """Result of ``analyze``: detected role without a claim to check."""

    vendor: str
    safeguard_id: str
    safeguard_title: str
    role: CapabilityRole
    confidence: int
    quality: str
    reasoning: str
    evidence: tuple[str, ...]
    gaps: tuple[str, ...]
    detected_tool_type: str
    tool_capability_description: str
    recommended_use: str
    additional_roles: tuple[CapabilityRole, ...] = ()

    @property
    def role_breakdown(self) -> dict[str, bool]:
        return {role.value: role == self.role for role in CapabilityRole}

    def to_dict(self) -> dict:
        return {
            "vendor": self.vendor,
            "safeguard_id": self.safeguard_id,
            "safeguard_title": self.safeguard_title,
            "role": self.role.value,
            "role_breakdown": self.role_breakdown,
            "confidence": self.confidence,
            "quality": self.quality,
            "reasoning": self.reasoning,
            "evidence": list(self.evidence),
            "gaps": list(self.gaps),
            "detected_tool_type": self.detected_tool_type,
            "tool_capability_description": self.tool_capability_description,
            "recommended_use": self.recommended_use,
            "additional_roles": _role_list(list(self.additional_roles)),
        }
