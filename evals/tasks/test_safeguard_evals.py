"""
Safeguard Catalog Evals -- loading, lookups, listings and the detail cache.
"""

import pytest

from framework_mapper.safeguards import IMPLEMENTATION_EXAMPLES, NotFoundError, SafeguardManager


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class TestCatalog:
    """Eval: The bundled CIS Controls v8.1 catalog loads completely."""

    def test_loads_all_safeguards(self, manager):
        assert len(manager) == 153
        assert manager.framework == "CIS Controls v8.1"

    def test_numeric_ordering(self, manager):
        ids = manager.list_safeguard_ids()
        assert ids[0] == "1.1"
        assert ids.index("3.2") < ids.index("3.10")
        assert ids.index("3.9") < ids.index("3.10")

    def test_id_list_is_a_copy(self, manager):
        ids = manager.list_safeguard_ids()
        ids.clear()
        assert len(manager.list_safeguard_ids()) == 153

    def test_get_safeguard(self, manager):
        sg = manager.get_safeguard("1.1")
        assert sg.title == "Establish and Maintain a Detailed Enterprise Asset Inventory"
        assert "asset" in sg.keywords
        assert sg.domain == "Enterprise Asset Inventory"
        assert sg.required_tool_types == frozenset({"inventory"})

    def test_element_lists_carried(self, manager):
        sg = manager.get_safeguard("7.1")
        assert "vulnerability assessment" in sg.core_requirements
        assert len(sg.sub_taxonomical_elements) == 8
        assert sg.governance_elements[-1] == "vulnerability management policy"

    def test_unrestricted_safeguard_has_no_domain(self, manager):
        sg = manager.get_safeguard("8.1")
        assert sg.domain is None
        assert sg.required_tool_types == frozenset()

    def test_missing_safeguard(self, manager):
        assert manager.get_safeguard("99.99") is None
        assert not manager.has_safeguard("99.99")
        with pytest.raises(NotFoundError) as exc:
            manager.require_safeguard("99.99")
        assert "99.99" in str(exc.value)

    def test_domain_requirement_lookup(self, manager):
        assert manager.get_domain_requirement("5.1").required_tool_types == frozenset(
            {"identity_management"}
        )
        assert manager.get_domain_requirement("8.1") is None


class TestDetails:
    """Eval: Detail records carry domain fields and optional examples."""

    def test_domain_fields_added(self, manager):
        details = manager.get_safeguard_details("1.1")
        assert details["domain"] == "Enterprise Asset Inventory"
        assert details["required_tool_types"] == ["inventory"]
        assert details["governance_elements"]

    def test_examples_appended_only_on_request(self, manager):
        plain = manager.get_safeguard_details("1.1")
        rich = manager.get_safeguard_details("1.1", include_examples=True)
        examples = IMPLEMENTATION_EXAMPLES["1.1"]
        assert not any(e in plain["implementation_suggestions"] for e in examples)
        assert rich["implementation_suggestions"][-3:] == examples
        assert len(rich["implementation_suggestions"]) == len(plain["implementation_suggestions"]) + 3

    def test_details_are_copies(self, manager):
        first = manager.get_safeguard_details("2.1")
        first["title"] = "mutated"
        first["implementation_suggestions"].append("mutated")
        second = manager.get_safeguard_details("2.1")
        assert second["title"] != "mutated"
        assert "mutated" not in second["implementation_suggestions"]

    def test_missing_details(self, manager):
        assert manager.get_safeguard_details("42.42") is None


class TestListing:
    """Eval: Listing filters are case-insensitive."""

    def test_unfiltered(self, manager):
        summaries = manager.list_safeguards()
        assert len(summaries) == 153
        assert set(summaries[0]) == {
            "id", "title", "implementation_group", "security_function", "domain_restricted",
        }

    def test_filter_by_implementation_group(self, manager):
        ig1 = manager.list_safeguards(implementation_group="ig1")
        assert len(ig1) == 57
        assert all(s["implementation_group"] == "IG1" for s in ig1)

    def test_filter_by_security_function(self, manager):
        govern = manager.list_safeguards(security_function="govern")
        assert len(govern) == 23
        assert all("Govern" in s["security_function"] for s in govern)

    def test_domain_restricted_flag(self, manager):
        restricted = [s["id"] for s in manager.list_safeguards() if s["domain_restricted"]]
        assert restricted == ["1.1", "2.1", "5.1", "6.3", "7.1"]

    def test_no_match(self, manager):
        assert manager.list_safeguards(implementation_group="IG9") == []


class TestDetailCache:
    """Eval: TTL expiry, sweeping and size-bounded eviction."""

    def test_cached_until_ttl(self):
        clock = FakeClock()
        mgr = SafeguardManager(cache_ttl=300, sweep_interval=0, clock=clock)
        mgr.get_safeguard_details("1.1")
        assert mgr.cache_stats()["size"] == 1
        clock.advance(299)
        mgr.get_safeguard_details("1.1")
        assert mgr.cache_stats()["size"] == 1

    def test_expired_entries_swept(self):
        clock = FakeClock()
        mgr = SafeguardManager(cache_ttl=300, sweep_interval=0, clock=clock)
        mgr.get_safeguard_details("1.1")
        mgr.get_safeguard_details("1.2")
        clock.advance(300)
        mgr._sweep_if_needed()
        assert mgr.cache_stats()["size"] == 0

    def test_sweep_waits_for_interval(self):
        clock = FakeClock()
        mgr = SafeguardManager(cache_ttl=10, sweep_interval=1800, clock=clock)
        mgr.get_safeguard_details("1.1")
        clock.advance(60)
        mgr._sweep_if_needed()
        assert mgr.cache_stats()["size"] == 1

    def test_flag_is_part_of_the_key(self):
        mgr = SafeguardManager()
        mgr.get_safeguard_details("1.1")
        mgr.get_safeguard_details("1.1", include_examples=True)
        assert mgr.cache_stats()["size"] == 2

    def test_oldest_evicted_past_max(self):
        clock = FakeClock()
        mgr = SafeguardManager(max_cache_size=2, clock=clock)
        for safeguard_id in ["1.1", "1.2", "1.3"]:
            mgr.get_safeguard_details(safeguard_id)
            clock.advance(1)
        assert mgr.cache_stats()["size"] == 2
        assert "1.1_False" not in mgr._cache
        assert "1.3_False" in mgr._cache

    def test_refreshed_entry_moves_to_the_back(self):
        clock = FakeClock()
        mgr = SafeguardManager(cache_ttl=300, max_cache_size=2, clock=clock)
        mgr.get_safeguard_details("1.1")
        mgr.get_safeguard_details("1.2")
        clock.advance(301)
        mgr.get_safeguard_details("1.1")
        mgr.get_safeguard_details("1.3")
        assert list(mgr._cache) == ["1.1_False", "1.3_False"]

    def test_clear_cache(self):
        mgr = SafeguardManager()
        mgr.get_safeguard_details("1.1")
        mgr.clear_cache()
        assert mgr.cache_stats()["size"] == 0

    def test_cache_stats_shape(self):
        stats = SafeguardManager(cache_ttl=60, max_cache_size=5).cache_stats()
        assert stats["max_size"] == 5
        assert stats["ttl_seconds"] == 60
