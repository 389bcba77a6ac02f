"""
Safeguard catalog API -- read-only access to the CIS Controls reference data.

  GET /api/v1/safeguards                 -- Summaries (filters: implementation_group, security_function)
  GET /api/v1/safeguards/{safeguard_id}  -- Full record (?include_examples=true adds vendor examples)
"""

import logging

from fastapi import APIRouter, HTTPException, Query, Request

from ...safeguards import NotFoundError
from ...security import InvalidArgumentError
from ..models.responses import SafeguardListResponse, SafeguardSummary

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/safeguards", response_model=SafeguardListResponse)
async def list_safeguards(
    request: Request,
    implementation_group: str | None = Query(None, description="IG1, IG2 or IG3"),
    security_function: str | None = Query(None, description="e.g. Identify, Protect, Detect"),
) -> SafeguardListResponse:
    service = request.app.state.service
    summaries = service.list_safeguards(implementation_group, security_function)
    return SafeguardListResponse(
        framework=service.manager.framework,
        count=len(summaries),
        safeguards=[SafeguardSummary(**s) for s in summaries],
    )


@router.get("/safeguards/{safeguard_id}")
async def get_safeguard(
    safeguard_id: str,
    request: Request,
    include_examples: bool = Query(False),
) -> dict:
    """Full safeguard record, including domain restrictions where they apply."""
    try:
        return request.app.state.service.get_safeguard_details(safeguard_id, include_examples)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
