"""
API key authentication for the mapping endpoints.

Simple bearer token validation against Settings.api_key:

    API_KEY=your-secret-key            (server)
    Authorization: Bearer your-secret-key  (client)

In production (ENV=production) a key is REQUIRED and app creation fails
without one, unless AUTH_DISABLED=true is set explicitly. In development a
missing key leaves the endpoints open. Keys are compared in constant time.
"""

import hashlib
import hmac
import logging
from dataclasses import dataclass

from fastapi import HTTPException, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...config import Settings

logger = logging.getLogger(__name__)

security_scheme = HTTPBearer(auto_error=False)


@dataclass
class AuthContext:
    """Who made the request. ``client_id`` is a short hash of the key, or "anon"."""

    client_id: str = "anon"
    authenticated: bool = False


def check_production_auth(settings: Settings) -> None:
    """Call on startup: refuse to run unauthenticated in production by accident."""
    if settings.is_production:
        if settings.api_key is None:
            if settings.auth_disabled:
                logger.warning(
                    "[Auth] AUTH_DISABLED=true in production. "
                    "All mapping endpoints are unauthenticated."
                )
            else:
                raise RuntimeError(
                    "API_KEY is required in production mode. "
                    "Set API_KEY in the environment, or set AUTH_DISABLED=true "
                    "to explicitly run without authentication."
                )
    elif settings.api_key is None:
        logger.info("[Auth] No API_KEY set (dev mode). Endpoints are unauthenticated.")


async def verify_api_key(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Security(security_scheme),
) -> AuthContext:
    """FastAPI dependency: 401 without a key, 403 with the wrong one."""
    settings: Settings = request.app.state.settings
    expected_key = settings.api_key

    if expected_key is None:
        return AuthContext()

    client_host = request.client.host if request.client else "unknown"
    if credentials is None:
        logger.warning(f"[Auth] Missing credentials from {client_host}")
        raise HTTPException(status_code=401, detail="Missing API key")

    if not hmac.compare_digest(credentials.credentials, expected_key):
        logger.warning(f"[Auth] Invalid API key from {client_host}")
        raise HTTPException(status_code=403, detail="Invalid API key")

    client_id = hashlib.sha256(credentials.credentials.encode()).hexdigest()[:16]
    return AuthContext(client_id=client_id, authenticated=True)
