"""
MappingService -- the boundary between transports and the capability engine.

Order for every request: validate and sanitize input, resolve the safeguard
(NotFoundError), run the engine. The engine itself never raises, so any
exception leaving this class is an input problem the caller should report.
Both the CLI and the HTTP API go through here.
"""

import logging

from .capability import (
    CapabilityEngine,
    DomainValidator,
    Safeguard,
    ValidationResult,
    VendorAnalysis,
)
from .capability.models import UNKNOWN_TOOL_TYPE
from .config import Settings
from .monitoring import PerformanceMonitor
from .safeguards import NotFoundError, SafeguardManager
from .security.validators import (
    InvalidArgumentError,
    validate_capability_role,
    validate_not_empty,
    validate_safeguard_id,
    validate_text,
)

logger = logging.getLogger(__name__)


class MappingService:
    """
    Validates input, resolves safeguards and times every operation.

    Usage:
        service = MappingService.from_settings(load_settings())
        result = service.validate_mapping("Acme", "1.1", "full", text)
    """

    def __init__(
        self,
        settings: Settings | None = None,
        manager: SafeguardManager | None = None,
        engine: CapabilityEngine | None = None,
        monitor: PerformanceMonitor | None = None,
    ):
        self.settings = settings or Settings()
        self.manager = manager or SafeguardManager(
            data_path=self.settings.data_path,
            cache_ttl=self.settings.cache_ttl,
            max_cache_size=self.settings.cache_max_size,
            sweep_interval=self.settings.cache_sweep_interval,
        )
        # Domain checks must read the same table the catalog reports.
        self.engine = engine or CapabilityEngine(
            domain_validator=DomainValidator(requirements=self.manager.domain_requirements)
        )
        self.monitor = monitor or PerformanceMonitor(
            log_stats=self.settings.is_production,
            stats_interval=self.settings.stats_log_interval,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "MappingService":
        return cls(settings=settings)

    def _text(self, value: str | None, field_name: str) -> str:
        return validate_text(
            value,
            field_name,
            min_length=self.settings.min_text_length,
            max_length=self.settings.max_text_length,
        )

    def _resolve(self, safeguard_id: str | None) -> Safeguard:
        safeguard_id = validate_safeguard_id(safeguard_id)
        return self.manager.require_safeguard(safeguard_id)

    # =========================================================================
    # Engine operations
    # =========================================================================

    def analyze(
        self,
        vendor_name: str,
        safeguard_id: str,
        response_text: str,
        include_additional_roles: bool = False,
    ) -> VendorAnalysis:
        with self.monitor.track("analyze"):
            vendor = validate_not_empty(vendor_name, "vendor_name")
            text = self._text(response_text, "response_text")
            safeguard = self._resolve(safeguard_id)
            return self.engine.analyze(vendor, safeguard, text, include_additional_roles)

    def validate_mapping(
        self,
        vendor_name: str,
        safeguard_id: str,
        claimed_role: str,
        supporting_text: str,
        include_additional_roles: bool = False,
    ) -> ValidationResult:
        with self.monitor.track("validate_mapping"):
            vendor = validate_not_empty(vendor_name, "vendor_name")
            role = validate_capability_role(claimed_role)
            text = self._text(supporting_text, "supporting_text")
            safeguard = self._resolve(safeguard_id)
            return self.engine.validate_mapping(
                vendor, safeguard, role, text, include_additional_roles
            )

    def detect_tool_type(self, text: str, safeguard_id: str | None = None) -> dict:
        with self.monitor.track("detect_tool_type"):
            cleaned = self._text(text, "text")
            if safeguard_id:
                safeguard_id = self._resolve(safeguard_id).id
            detector = self.engine.tool_type_detector
            tool_type = detector.detect(cleaned, safeguard_id)
            scores = detector.score_all(cleaned, safeguard_id) if hasattr(detector, "score_all") else {}
            return {
                "tool_type": tool_type,
                "known": tool_type != UNKNOWN_TOOL_TYPE,
                "scores": scores,
            }

    # =========================================================================
    # Reference data
    # =========================================================================

    def get_safeguard_details(self, safeguard_id: str, include_examples: bool = False) -> dict:
        with self.monitor.track("get_safeguard_details"):
            safeguard_id = validate_safeguard_id(safeguard_id)
            details = self.manager.get_safeguard_details(safeguard_id, include_examples)
            if details is None:
                raise NotFoundError(safeguard_id)
            return details

    def list_safeguards(
        self,
        implementation_group: str | None = None,
        security_function: str | None = None,
    ) -> list[dict]:
        with self.monitor.track("list_safeguards"):
            return self.manager.list_safeguards(implementation_group, security_function)

    def metrics_snapshot(self) -> dict:
        snap = self.monitor.snapshot()
        snap["cache"] = self.manager.cache_stats()
        return snap


__all__ = ["InvalidArgumentError", "MappingService", "NotFoundError"]
