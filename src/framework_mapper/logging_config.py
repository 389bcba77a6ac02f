"""
Logging configuration for the CLI and the API gateway.

Every module logs through ``logging.getLogger(__name__)``; this installs a
single console handler on the ``framework_mapper`` package logger.
"""

import logging
import sys
from datetime import datetime

PACKAGE_LOGGER = "framework_mapper"


class MapperFormatter(logging.Formatter):
    """[HH:MM:SS.mmm] LEVEL [logger] message, optionally colored."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True, stream=None):
        super().__init__()
        stream = stream or sys.stderr
        self.use_colors = use_colors and hasattr(stream, "isatty") and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]
        level = record.levelname
        if self.use_colors:
            level = f"{self.COLORS.get(level, '')}{level}{self.RESET}"

        parts = [f"[{timestamp}]", f"{level:8}", f"[{record.name}]", record.getMessage()]
        if record.exc_info:
            parts.append(self.formatException(record.exc_info))
        return " ".join(parts)


def setup_logging(level: str = "INFO", use_colors: bool = True) -> logging.Logger:
    """Configure the package logger. Safe to call more than once."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    package_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(MapperFormatter(use_colors=use_colors, stream=sys.stderr))
    package_logger.addHandler(handler)

    package_logger.debug("Logging configured")
    return package_logger
