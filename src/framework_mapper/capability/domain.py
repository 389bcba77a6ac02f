"""
DomainValidator -- decides whether a FULL/PARTIAL claim fits the safeguard's domain.

Only implementation claims are restricted. A FULL or PARTIAL claim whose
detected tool type is outside the safeguard's required tool types is
downgraded to FACILITATES. No other role is ever changed.
"""

import logging
from collections.abc import Mapping

from .models import CapabilityRole, DomainRequirement, DomainValidation
from .tables import DOMAIN_REQUIREMENTS

logger = logging.getLogger(__name__)


class DomainValidator:
    """Checks claims against the domain requirement table.

    Usage:
        validator = DomainValidator()
        result = validator.validate_domain("1.1", CapabilityRole.FULL, "threat_intelligence")
        result.effective_role  # -> CapabilityRole.FACILITATES
    """

    def __init__(self, requirements: Mapping[str, DomainRequirement] = DOMAIN_REQUIREMENTS):
        self._requirements = requirements

    def requirement_for(self, safeguard_id: str) -> DomainRequirement | None:
        return self._requirements.get(safeguard_id)

    def validate_domain(
        self,
        safeguard_id: str,
        claimed_role: CapabilityRole,
        detected_tool_type: str,
    ) -> DomainValidation:
        requirement = self._requirements.get(safeguard_id)
        if requirement is None:
            return DomainValidation(
                domain_match=True,
                effective_role=claimed_role,
                reasoning=f"Safeguard {safeguard_id} has no tool type restriction",
            )

        required = sorted(requirement.required_tool_types)
        in_domain = detected_tool_type in requirement.required_tool_types

        if not claimed_role.is_implementation:
            return DomainValidation(
                domain_match=True,
                effective_role=claimed_role,
                domain_name=requirement.domain_name,
                required_tool_types=required,
                tool_type_in_domain=in_domain,
                reasoning=(
                    f"{claimed_role.label} claims are not restricted by the "
                    f"{requirement.domain_name} domain"
                ),
            )

        if in_domain:
            return DomainValidation(
                domain_match=True,
                effective_role=claimed_role,
                domain_name=requirement.domain_name,
                required_tool_types=required,
                tool_type_in_domain=True,
                reasoning=(
                    f"{detected_tool_type} tool is appropriate for "
                    f"{requirement.domain_name} ({safeguard_id})"
                ),
            )

        reasoning = (
            f"Domain mismatch: {requirement.domain_name} ({safeguard_id}) requires "
            f"{' or '.join(required)} tools for {claimed_role.label} capability, "
            f"but the text describes a {detected_tool_type} tool. "
            f"Claim adjusted from {claimed_role.label} to {CapabilityRole.FACILITATES.label}."
        )
        logger.info(
            f"[DomainValidator] {safeguard_id}: {claimed_role.label} -> FACILITATES "
            f"(tool type {detected_tool_type} not in {required})"
        )
        return DomainValidation(
            domain_match=False,
            effective_role=CapabilityRole.FACILITATES,
            adjusted=True,
            domain_name=requirement.domain_name,
            required_tool_types=required,
            tool_type_in_domain=False,
            reasoning=reasoning,
        )
