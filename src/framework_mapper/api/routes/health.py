"""
Health and metrics endpoints.

  GET /health   -- Liveness probe (always 200 if the process is alive)
  GET /metrics  -- Request counts, timings and cache stats
"""

import logging

from fastapi import APIRouter, Request

from ... import __version__
from ..models.responses import HealthResponse, MetricsResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def liveness(request: Request) -> HealthResponse:
    """Liveness probe -- returns 200 if the process is running."""
    service = request.app.state.service
    return HealthResponse(
        status="healthy",
        version=__version__,
        safeguards_loaded=len(service.manager),
        uptime_seconds=round(service.monitor.uptime_seconds, 1),
    )


@router.get("/metrics", response_model=MetricsResponse)
async def metrics(request: Request) -> MetricsResponse:
    """Performance snapshot for the running service."""
    return MetricsResponse(**request.app.state.service.metrics_snapshot())
