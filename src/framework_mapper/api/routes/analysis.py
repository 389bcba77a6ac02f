"""
Capability analysis API -- run the classification engine over vendor text.

  POST /api/v1/analyze    -- Detect the role a vendor response supports
  POST /api/v1/validate   -- Check a claimed role against supporting text
  POST /api/v1/tool-type  -- Detect the tool category a text describes

Security:
  - Input validated by the service before the engine runs
  - Auth and rate limiting on every endpoint
"""

import logging
from collections.abc import Callable
from typing import TypeVar

from fastapi import APIRouter, Depends, HTTPException, Request

from ...safeguards import NotFoundError
from ...security import InvalidArgumentError
from ..middleware.auth import AuthContext, verify_api_key
from ..middleware.rate_limit import check_rate_limit
from ..models.requests import AnalyzeRequest, ToolTypeRequest, ValidateRequest
from ..models.responses import ToolTypeResponse, ValidationResponse, VendorAnalysisResponse

logger = logging.getLogger(__name__)
router = APIRouter()

T = TypeVar("T")


def _run(operation: Callable[[], T]) -> T:
    """Map boundary errors to HTTP status codes."""
    try:
        return operation()
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/analyze", response_model=VendorAnalysisResponse)
async def analyze(
    body: AnalyzeRequest,
    request: Request,
    auth: AuthContext = Depends(verify_api_key),
    _rate: None = Depends(check_rate_limit),
) -> VendorAnalysisResponse:
    service = request.app.state.service
    result = _run(lambda: service.analyze(
        body.vendor_name,
        body.safeguard_id,
        body.response_text,
        include_additional_roles=body.include_additional_roles,
    ))
    logger.info(
        f"[API] analyze {body.safeguard_id} for {auth.client_id}: {result.role.value}"
    )
    return VendorAnalysisResponse(**result.to_dict())


@router.post("/validate", response_model=ValidationResponse)
async def validate(
    body: ValidateRequest,
    request: Request,
    auth: AuthContext = Depends(verify_api_key),
    _rate: None = Depends(check_rate_limit),
) -> ValidationResponse:
    service = request.app.state.service
    result = _run(lambda: service.validate_mapping(
        body.vendor_name,
        body.safeguard_id,
        body.claimed_role,
        body.supporting_text,
        include_additional_roles=body.include_additional_roles,
    ))
    logger.info(
        f"[API] validate {body.safeguard_id} for {auth.client_id}: {result.status.value}"
    )
    return ValidationResponse(**result.to_dict())


@router.post("/tool-type", response_model=ToolTypeResponse)
async def tool_type(
    body: ToolTypeRequest,
    request: Request,
    _auth: AuthContext = Depends(verify_api_key),
    _rate: None = Depends(check_rate_limit),
) -> ToolTypeResponse:
    service = request.app.state.service
    return ToolTypeResponse(**_run(lambda: service.detect_tool_type(body.text, body.safeguard_id)))
