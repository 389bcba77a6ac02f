"""
Rate limiting -- caps mapping requests per client IP.

A sliding one-minute window kept in memory on the app instance, sized by
Settings.rate_limit_per_minute. Each app created by create_app() gets its
own window, so tests and parallel apps never share counters.
"""

import logging
import time
from collections import defaultdict

from fastapi import HTTPException, Request

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 60.0


class RateLimiter:
    """Per-client sliding window counter."""

    def __init__(self, limit: int, window_seconds: float = WINDOW_SECONDS):
        self.limit = limit
        self.window_seconds = window_seconds
        self._request_log: dict[str, list[float]] = defaultdict(list)

    def hit(self, client_id: str, now: float | None = None) -> bool:
        """Record a request. Returns False if the client is over the limit."""
        now = time.time() if now is None else now
        cutoff = now - self.window_seconds
        recent = [ts for ts in self._request_log[client_id] if ts > cutoff]
        if len(recent) >= self.limit:
            self._request_log[client_id] = recent
            return False
        recent.append(now)
        self._request_log[client_id] = recent
        return True

    def reset(self) -> None:
        self._request_log.clear()


async def check_rate_limit(request: Request) -> None:
    """
    FastAPI dependency. Raises HTTP 429 once a client exceeds the limit.
    """
    limiter: RateLimiter = request.app.state.rate_limiter
    client_ip = request.client.host if request.client else "unknown"

    if not limiter.hit(client_ip):
        logger.warning(f"[RateLimit] Client {client_ip} exceeded {limiter.limit}/min")
        raise HTTPException(
            status_code=429,
            detail=f"Rate limit exceeded ({limiter.limit} requests per minute)",
            headers={"Retry-After": str(int(limiter.window_seconds))},
        )
