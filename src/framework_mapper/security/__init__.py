"""Security utilities -- input validation and sanitization at the system boundary."""
from .validators import (
    InvalidArgumentError,
    sanitize_text,
    validate_capability_role,
    validate_in_choices,
    validate_length,
    validate_not_empty,
    validate_safeguard_id,
    validate_text,
)

__all__ = [
    "InvalidArgumentError",
    "sanitize_text",
    "validate_capability_role",
    "validate_in_choices",
    "validate_length",
    "validate_not_empty",
    "validate_safeguard_id",
    "validate_text",
]
