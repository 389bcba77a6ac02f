"""Eval test fixtures -- shared catalog, engine and service."""

import pytest

from framework_mapper.capability import CapabilityEngine, Safeguard
from framework_mapper.config import Settings
from framework_mapper.safeguards import SafeguardManager
from framework_mapper.service import MappingService


@pytest.fixture(scope="session")
def manager():
    """One catalog for the whole session; loading the JSON is the slow part."""
    return SafeguardManager()


@pytest.fixture(scope="session")
def engine():
    return CapabilityEngine()


@pytest.fixture
def service(manager):
    return MappingService(settings=Settings(), manager=manager)


@pytest.fixture
def safeguard_1_1(manager) -> Safeguard:
    return manager.get_safeguard("1.1")


@pytest.fixture
def bare_safeguard() -> Safeguard:
    """A safeguard with no keywords, curated phrases or domain restriction."""
    return Safeguard(id="99.1", title="Synthetic Safeguard")
