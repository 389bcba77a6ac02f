"""
SafeguardManager -- read-only access to the CIS Controls v8.1 safeguard catalog.

Loads data/safeguards.json once at construction. Detail lookups are memoized
per (safeguard_id, include_examples) with a short TTL; expired entries are
swept lazily, and the oldest entries are evicted when the cache grows past
its size limit.
"""

import copy
import json
import logging
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from ..capability.models import DomainRequirement, Safeguard
from ..capability.tables import DOMAIN_REQUIREMENTS

logger = logging.getLogger(__name__)

DEFAULT_DATA_PATH = Path(__file__).parent / "data" / "safeguards.json"
DEFAULT_CACHE_TTL = 300.0
DEFAULT_MAX_CACHE_SIZE = 1000
DEFAULT_SWEEP_INTERVAL = 1800.0


IMPLEMENTATION_EXAMPLES: dict[str, list[str]] = {
    "1.1": [
        "Example: Use Lansweeper for automated asset discovery",
        "Example: Implement ServiceNow CMDB for centralized tracking",
        "Example: Deploy Microsoft SCCM for Windows asset management",
    ],
    "5.1": [
        "Example: Use Azure AD for centralized account management",
        "Example: Implement Okta for identity lifecycle management",
        "Example: Deploy JumpCloud for directory services",
    ],
    "6.3": [
        "Example: Enable Azure MFA for all external applications",
        "Example: Implement Duo Security for multi-factor authentication",
        "Example: Use Google Workspace SSO with MFA enforcement",
    ],
    "7.1": [
        "Example: Establish Nessus vulnerability scanning schedule",
        "Example: Implement Qualys VMDR for continuous monitoring",
        "Example: Use Rapid7 InsightVM for vulnerability management",
    ],
}


class NotFoundError(LookupError):
    """Raised when a safeguard id is well-formed but not in the catalog."""

    def __init__(self, safeguard_id: str):
        self.safeguard_id = safeguard_id
        super().__init__(
            f"Safeguard {safeguard_id} not found. "
            f"Use the safeguard list operation to see available ids."
        )


@dataclass
class _CacheEntry:
    data: dict
    timestamp: float


def _sort_key(safeguard_id: str) -> tuple[int, int]:
    major, _, minor = safeguard_id.partition(".")
    return int(major), int(minor)


class SafeguardManager:
    """
    Catalog of safeguards plus the domain requirement table.

    Usage:
        manager = SafeguardManager()
        manager.get_safeguard("1.1").title
        manager.get_safeguard_details("1.1", include_examples=True)
    """

    def __init__(
        self,
        data_path: Path | None = None,
        cache_ttl: float = DEFAULT_CACHE_TTL,
        max_cache_size: int = DEFAULT_MAX_CACHE_SIZE,
        sweep_interval: float = DEFAULT_SWEEP_INTERVAL,
        domain_requirements: dict[str, DomainRequirement] | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self._data_path = Path(data_path) if data_path else DEFAULT_DATA_PATH
        self._cache_ttl = cache_ttl
        self._max_cache_size = max_cache_size
        self._sweep_interval = sweep_interval
        self._clock = clock
        self._requirements = (
            domain_requirements if domain_requirements is not None else dict(DOMAIN_REQUIREMENTS)
        )
        self._cache: OrderedDict[str, _CacheEntry] = OrderedDict()
        self._last_sweep = clock()
        self._records, self.framework = self._load()
        self._sorted_ids = sorted(self._records, key=_sort_key)
        logger.info(
            f"[SafeguardManager] Loaded {len(self._records)} safeguards "
            f"({self.framework}) from {self._data_path.name}"
        )

    def _load(self) -> tuple[dict[str, dict], str]:
        with open(self._data_path, encoding="utf-8") as f:
            data = json.load(f)
        return data["safeguards"], data.get("framework", "")

    # =========================================================================
    # Engine-facing lookups
    # =========================================================================

    def has_safeguard(self, safeguard_id: str) -> bool:
        return safeguard_id in self._records

    def get_safeguard(self, safeguard_id: str) -> Safeguard | None:
        record = self._records.get(safeguard_id)
        if record is None:
            return None
        requirement = self._requirements.get(safeguard_id)
        return Safeguard(
            id=safeguard_id,
            title=record.get("title", ""),
            description=record.get("description", ""),
            keywords=tuple(record.get("keywords", [])),
            domain=requirement.domain_name if requirement else None,
            required_tool_types=requirement.required_tool_types if requirement else frozenset(),
            core_requirements=tuple(record.get("core_requirements", [])),
            sub_taxonomical_elements=tuple(record.get("sub_taxonomical_elements", [])),
            governance_elements=tuple(record.get("governance_elements", [])),
        )

    def require_safeguard(self, safeguard_id: str) -> Safeguard:
        safeguard = self.get_safeguard(safeguard_id)
        if safeguard is None:
            raise NotFoundError(safeguard_id)
        return safeguard

    def get_domain_requirement(self, safeguard_id: str) -> DomainRequirement | None:
        return self._requirements.get(safeguard_id)

    @property
    def domain_requirements(self) -> MappingProxyType:
        """Read-only view of the table used for records and domain validation."""
        return MappingProxyType(self._requirements)

    def list_safeguard_ids(self) -> list[str]:
        """All ids sorted numerically ("1.2" before "1.10"). Returns a copy."""
        return list(self._sorted_ids)

    def __len__(self) -> int:
        return len(self._records)

    # =========================================================================
    # Details and listings
    # =========================================================================

    def get_safeguard_details(
        self, safeguard_id: str, include_examples: bool = False
    ) -> dict | None:
        cache_key = f"{safeguard_id}_{include_examples}"
        cached = self._get_cached(cache_key)
        if cached is not None:
            return copy.deepcopy(cached)

        record = self._records.get(safeguard_id)
        if record is None:
            return None

        details = copy.deepcopy(record)
        requirement = self._requirements.get(safeguard_id)
        if requirement is not None:
            details["domain"] = requirement.domain_name
            details["required_tool_types"] = sorted(requirement.required_tool_types)
        if include_examples:
            suggestions = details.get("implementation_suggestions", [])
            details["implementation_suggestions"] = (
                suggestions + IMPLEMENTATION_EXAMPLES.get(safeguard_id, [])
            )

        self._store(cache_key, details)
        return copy.deepcopy(details)

    def list_safeguards(
        self,
        implementation_group: str | None = None,
        security_function: str | None = None,
    ) -> list[dict]:
        """Summaries in id order, optionally filtered (case-insensitive)."""
        summaries = []
        for safeguard_id in self._sorted_ids:
            record = self._records[safeguard_id]
            if implementation_group and (
                record.get("implementation_group", "").lower() != implementation_group.lower()
            ):
                continue
            functions = [f.lower() for f in record.get("security_function", [])]
            if security_function and security_function.lower() not in functions:
                continue
            summaries.append({
                "id": safeguard_id,
                "title": record.get("title", ""),
                "implementation_group": record.get("implementation_group", ""),
                "security_function": list(record.get("security_function", [])),
                "domain_restricted": safeguard_id in self._requirements,
            })
        return summaries

    # =========================================================================
    # Cache housekeeping
    # =========================================================================

    def _get_cached(self, cache_key: str) -> dict | None:
        self._sweep_if_needed()
        entry = self._cache.get(cache_key)
        if entry and self._clock() - entry.timestamp < self._cache_ttl:
            return entry.data
        return None

    def _sweep_if_needed(self) -> None:
        now = self._clock()
        if now - self._last_sweep < self._sweep_interval:
            return

        expired = [k for k, e in self._cache.items() if now - e.timestamp >= self._cache_ttl]
        for key in expired:
            del self._cache[key]
        if expired:
            logger.debug(
                f"[SafeguardManager] Swept {len(expired)} expired entries, "
                f"{len(self._cache)} remaining"
            )
        self._last_sweep = now

    def _store(self, cache_key: str, details: dict) -> None:
        # Insertion order is timestamp order, so the front is always oldest.
        self._cache.pop(cache_key, None)
        self._cache[cache_key] = _CacheEntry(data=details, timestamp=self._clock())
        evicted = 0
        while len(self._cache) > self._max_cache_size:
            self._cache.popitem(last=False)
            evicted += 1
        if evicted:
            logger.debug(f"[SafeguardManager] Evicted {evicted} oldest cache entries")

    def cache_stats(self) -> dict:
        return {
            "size": len(self._cache),
            "max_size": self._max_cache_size,
            "ttl_seconds": self._cache_ttl,
            "last_sweep": self._last_sweep,
        }

    def clear_cache(self) -> None:
        self._cache.clear()
        self._last_sweep = self._clock()
        logger.info("[SafeguardManager] Cache cleared")
