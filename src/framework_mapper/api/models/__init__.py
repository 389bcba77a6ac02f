"""Pydantic models for API request/response contracts."""
from .requests import (
    AnalyzeRequest,
    ToolTypeRequest,
    ValidateRequest,
)
from .responses import (
    HealthResponse,
    MetricsResponse,
    SafeguardListResponse,
    SafeguardSummary,
    ToolTypeResponse,
    ValidationResponse,
    VendorAnalysisResponse,
)
