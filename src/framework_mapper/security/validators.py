"""
Input Validators - validation for user input at system boundaries.

Parse at the boundary: validate and type-check all external input
before it reaches the capability engine. The engine assumes every
safeguard id, role and text it receives has already passed through here.
"""

import logging
import re

from ..capability.models import CapabilityRole

logger = logging.getLogger(__name__)

SAFEGUARD_ID_PATTERN = re.compile(r"^\d+\.\d+$")
CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

DEFAULT_MIN_TEXT_LENGTH = 10
DEFAULT_MAX_TEXT_LENGTH = 10_000


class InvalidArgumentError(ValueError):
    """Raised when input validation fails. Contains a user-friendly message."""

    pass


def sanitize_text(value: str) -> str:
    """Strip NUL/control characters (keeping tabs and newlines) and trim."""
    return CONTROL_CHARS.sub("", value).strip()


def validate_not_empty(value: str | None, field_name: str = "input") -> str:
    """Validate that a string is not empty or whitespace-only."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(f"{field_name} cannot be empty")
    return value.strip()


def validate_length(
    value: str,
    field_name: str = "input",
    min_length: int = 0,
    max_length: int = 100_000,
) -> str:
    """Validate string length is within bounds."""
    if len(value) < min_length:
        raise InvalidArgumentError(f"{field_name} must be at least {min_length} characters")
    if len(value) > max_length:
        raise InvalidArgumentError(f"{field_name} must be at most {max_length} characters")
    return value


def validate_in_choices(value: str, choices: list[str], field_name: str = "value") -> str:
    """Validate that a value is one of the allowed choices."""
    if value not in choices:
        raise InvalidArgumentError(f"{field_name} must be one of: {', '.join(choices)}")
    return value


def validate_safeguard_id(value: str | None, field_name: str = "safeguard_id") -> str:
    """Validate the "X.Y" safeguard id format. Existence is checked by the catalog."""
    value = validate_not_empty(value, field_name)
    if not SAFEGUARD_ID_PATTERN.match(value):
        raise InvalidArgumentError(
            f'{field_name} must be in format "X.Y" (e.g., "1.1", "5.1"), got "{value}"'
        )
    return value


def validate_capability_role(
    value: str | CapabilityRole | None, field_name: str = "claimed_role"
) -> CapabilityRole:
    """Parse a capability role name, case-insensitively."""
    if isinstance(value, CapabilityRole):
        return value
    value = validate_not_empty(value, field_name).lower()
    validate_in_choices(value, [r.value for r in CapabilityRole], field_name)
    return CapabilityRole(value)


def validate_text(
    value: str | None,
    field_name: str = "text",
    min_length: int = DEFAULT_MIN_TEXT_LENGTH,
    max_length: int = DEFAULT_MAX_TEXT_LENGTH,
) -> str:
    """Sanitize free text, then enforce the length bounds on what remains."""
    if not isinstance(value, str):
        raise InvalidArgumentError(f"{field_name} must be a string")
    cleaned = sanitize_text(value)
    if not cleaned:
        raise InvalidArgumentError(f"{field_name} cannot be empty")
    validate_length(cleaned, field_name, min_length, max_length)
    if len(cleaned) != len(value.strip()):
        logger.debug(f"[Validators] Stripped control characters from {field_name}")
    return cleaned
