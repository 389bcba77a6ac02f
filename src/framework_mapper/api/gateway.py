"""
API Gateway -- FastAPI application factory.

Creates the FastAPI app with all routes, middleware, and dependencies.
This is the entrypoint for uvicorn:

    uvicorn framework_mapper.api.gateway:create_app --factory --host 0.0.0.0 --port 8000

Security:
  - CORS restricted to configured origins (default: localhost only)
  - Production auth check on startup
  - Rate limiting on mapping endpoints
  - All external input validated at the service boundary

Route logic lives in routes/.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import Settings, load_settings
from ..logging_config import setup_logging
from ..service import MappingService
from .middleware.auth import check_production_auth
from .middleware.rate_limit import RateLimiter
from .routes import analysis, health, safeguards

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    service: MappingService | None = None,
) -> FastAPI:
    """
    Application factory -- creates and configures the FastAPI app.

    Args:
        settings: Runtime configuration (loaded from the environment if None).
        service: Pre-built mapping service (created from settings if None).
    """
    if settings is None:
        settings = load_settings()
        setup_logging(settings.log_level)

    check_production_auth(settings)

    application = FastAPI(
        title="Framework Mapper API",
        description="Capability classification and domain validation for CIS Controls safeguards",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Authorization", "Content-Type"],
    )

    application.state.settings = settings
    application.state.service = service or MappingService.from_settings(settings)
    application.state.rate_limiter = RateLimiter(settings.rate_limit_per_minute)

    application.include_router(health.router, tags=["Health"])
    application.include_router(
        safeguards.router, prefix="/api/v1", tags=["Safeguards"]
    )
    application.include_router(
        analysis.router, prefix="/api/v1", tags=["Capability Analysis"]
    )

    logger.info(
        f"[Gateway] API gateway initialized ({settings.env}, "
        f"{len(application.state.service.manager)} safeguards)"
    )
    return application
