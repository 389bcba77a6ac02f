"""
Pydantic request models -- the API contract for mapping clients.

  POST /api/v1/analyze    -> AnalyzeRequest
  POST /api/v1/validate   -> ValidateRequest
  POST /api/v1/tool-type  -> ToolTypeRequest

Field bounds here are only a first guard against oversized payloads. The
precise text and id rules live in security/validators.py so that the CLI
and the API reject the same input with the same message.
"""

from pydantic import BaseModel, Field

MAX_PAYLOAD_CHARS = 100_000


class AnalyzeRequest(BaseModel):
    """Detect the capability role a vendor response supports."""

    vendor_name: str = Field(..., description="Vendor or product name", max_length=200)
    safeguard_id: str = Field(..., description='CIS safeguard id, e.g. "1.1"', max_length=10)
    response_text: str = Field(
        ..., description="Vendor's description of the tool", max_length=MAX_PAYLOAD_CHARS
    )
    include_additional_roles: bool = Field(
        False, description="Also report other roles the text evidences"
    )


class ValidateRequest(BaseModel):
    """Check a vendor's claimed capability role against its supporting text."""

    vendor_name: str = Field(..., description="Vendor or product name", max_length=200)
    safeguard_id: str = Field(..., description='CIS safeguard id, e.g. "1.1"', max_length=10)
    claimed_role: str = Field(
        ...,
        description="One of: full, partial, facilitates, governance, validates",
        max_length=20,
    )
    supporting_text: str = Field(
        ..., description="Evidence offered for the claim", max_length=MAX_PAYLOAD_CHARS
    )
    include_additional_roles: bool = Field(
        False, description="Also report other roles the text evidences"
    )


class ToolTypeRequest(BaseModel):
    """Detect the tool category a text describes."""

    text: str = Field(..., max_length=MAX_PAYLOAD_CHARS)
    safeguard_id: str | None = Field(
        None, description="Optional safeguard for the context affinity bonus", max_length=10
    )
