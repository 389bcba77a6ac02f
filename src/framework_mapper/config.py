"""
Runtime configuration loaded from environment variables.

Every value has a safe default; a value that does not parse falls back to
the default rather than failing startup.

  FRAMEWORK_MAPPER_DATA_PATH       safeguard catalog JSON (default: bundled file)
  SAFEGUARD_CACHE_TTL=300          seconds a detail lookup stays cached
  SAFEGUARD_CACHE_MAX_SIZE=1000    cached detail entries before eviction
  SAFEGUARD_CACHE_SWEEP_INTERVAL=1800
  MIN_TEXT_LENGTH=10               bounds for vendor/supporting text
  MAX_TEXT_LENGTH=10000
  STATS_LOG_INTERVAL=300           seconds between production stats logs
  ENV=development                  "production" enables stats logging and required auth
  LOG_LEVEL=INFO
  CORS_ORIGINS                     comma-separated
  RATE_LIMIT_PER_MINUTE=60
  API_KEY / AUTH_DISABLED          see api/middleware/auth.py
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:8000",
    "http://localhost:8080",
]


def _get_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, default))
    except ValueError:
        logger.warning(f"[Config] {name} is not an integer, using {default}")
        return default


def _get_float(name: str, default: float) -> float:
    try:
        return float(os.environ.get(name, default))
    except ValueError:
        logger.warning(f"[Config] {name} is not a number, using {default}")
        return default


def _get_bool(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("true", "1", "yes")


def _get_list(name: str, default: list[str]) -> list[str]:
    raw = os.environ.get(name, "")
    if raw.strip():
        return [item.strip() for item in raw.split(",") if item.strip()]
    return list(default)


@dataclass
class Settings:
    """Service configuration. Construct directly in tests, via load_settings() elsewhere."""

    data_path: Path | None = None
    cache_ttl: float = 300.0
    cache_max_size: int = 1000
    cache_sweep_interval: float = 1800.0
    min_text_length: int = 10
    max_text_length: int = 10_000
    stats_log_interval: float = 300.0
    env: str = "development"
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    rate_limit_per_minute: int = 60
    api_key: str | None = None
    auth_disabled: bool = False

    @property
    def is_production(self) -> bool:
        return self.env.lower() in ("production", "prod", "staging")


def load_settings() -> Settings:
    """Build Settings from the current environment."""
    data_path = os.environ.get("FRAMEWORK_MAPPER_DATA_PATH", "").strip()
    return Settings(
        data_path=Path(data_path) if data_path else None,
        cache_ttl=_get_float("SAFEGUARD_CACHE_TTL", 300.0),
        cache_max_size=_get_int("SAFEGUARD_CACHE_MAX_SIZE", 1000),
        cache_sweep_interval=_get_float("SAFEGUARD_CACHE_SWEEP_INTERVAL", 1800.0),
        min_text_length=_get_int("MIN_TEXT_LENGTH", 10),
        max_text_length=_get_int("MAX_TEXT_LENGTH", 10_000),
        stats_log_interval=_get_float("STATS_LOG_INTERVAL", 300.0),
        env=os.environ.get("ENV", os.environ.get("ENVIRONMENT", "development")),
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
        cors_origins=_get_list("CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
        rate_limit_per_minute=_get_int("RATE_LIMIT_PER_MINUTE", 60),
        api_key=os.environ.get("API_KEY", "").strip() or None,
        auth_disabled=_get_bool("AUTH_DISABLED"),
    )
