"""
Pydantic response models -- what the API returns.

Engine results are frozen dataclasses; routes convert them with
``Model(**result.to_dict())`` so the wire shape stays in one place.
"""

from pydantic import BaseModel, Field


# =============================================================================
# ENGINE RESULTS
# =============================================================================


class VendorAnalysisResponse(BaseModel):
    """Returned by POST /api/v1/analyze."""

    vendor: str
    safeguard_id: str
    safeguard_title: str
    role: str
    role_breakdown: dict[str, bool]
    confidence: int
    quality: str
    reasoning: str
    evidence: list[str] = Field(default_factory=list)
    gaps: list[str] = Field(default_factory=list)
    detected_tool_type: str
    tool_capability_description: str
    recommended_use: str
    additional_roles: list[str] = Field(default_factory=list)


class ValidationResponse(BaseModel):
    """Returned by POST /api/v1/validate."""

    vendor: str
    safeguard_id: str
    safeguard_title: str
    claimed_role: str
    effective_role: str
    detected_role: str
    detected_tool_type: str
    domain_match: bool
    domain_adjusted: bool
    domain_reasoning: str
    required_tool_types: list[str] = Field(default_factory=list)
    alignment_score: int
    confidence_score: int
    status: str
    quality: str
    evidence: list[str] = Field(default_factory=list)
    gaps: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    feedback: str
    additional_roles: list[str] = Field(default_factory=list)


class ToolTypeResponse(BaseModel):
    """Returned by POST /api/v1/tool-type."""

    tool_type: str
    known: bool
    scores: dict[str, int] = Field(default_factory=dict)


# =============================================================================
# REFERENCE DATA
# =============================================================================


class SafeguardSummary(BaseModel):
    id: str
    title: str
    implementation_group: str
    security_function: list[str] = Field(default_factory=list)
    domain_restricted: bool = False


class SafeguardListResponse(BaseModel):
    framework: str
    count: int
    safeguards: list[SafeguardSummary] = Field(default_factory=list)


# =============================================================================
# HEALTH & METRICS
# =============================================================================


class HealthResponse(BaseModel):
    """Liveness probe response."""

    status: str = "healthy"
    version: str = ""
    safeguards_loaded: int = 0
    uptime_seconds: float = 0.0


class MetricsResponse(BaseModel):
    """Performance snapshot."""

    uptime_seconds: float = 0.0
    total_requests: int = 0
    error_count: int = 0
    error_rate: float = 0.0
    operations: dict[str, dict] = Field(default_factory=dict)
    cache: dict = Field(default_factory=dict)
