"""framework-mapper -- capability classification and domain validation for CIS Controls safeguards."""

__version__ = "0.1.0"
