"""Shared test fixtures for pytest."""

import pytest

from tcmodel.client import AgentPools, InMemoryPoolTransport


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Drop cached settings so each test sees its own environment."""
    import tcmodel.config

    tcmodel.config.get_settings.cache_clear()
    yield
    tcmodel.config.get_settings.cache_clear()


@pytest.fixture
def transport():
    """In-memory server state with two registered projects."""
    transport = InMemoryPoolTransport()
    transport.register_project("FirstProject", "First Project")
    transport.register_project("SecondProject", "Second Project")
    return transport


@pytest.fixture
def agent_pools(transport):
    """Agent pool operations over the in-memory transport."""
    return AgentPools(transport)
