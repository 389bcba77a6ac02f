"""Safeguard reference data -- the CIS Controls v8.1 catalog and its lookup cache."""

from .manager import IMPLEMENTATION_EXAMPLES, NotFoundError, SafeguardManager

__all__ = ["IMPLEMENTATION_EXAMPLES", "NotFoundError", "SafeguardManager"]
