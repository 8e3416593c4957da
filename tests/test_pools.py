"""Tests for agent pool domain values and wire schemas."""

import pytest

from tcmodel.errors import InvalidOperationError
from tcmodel.pools import (
    DEFAULT_POOL_ID,
    AgentPool,
    PoolProjectAssignment,
    ProjectRef,
    ensure_not_default_pool,
)
from tcmodel.schemas import AgentPoolCreate, AgentPoolList, AgentPoolSchema


class TestProjectRef:
    """Tests for ProjectRef identity."""

    def test_identity_is_id(self):
        assert ProjectRef("P1", "Old name") == ProjectRef("P1", "New name")
        assert len({ProjectRef("P1", "a"), ProjectRef("P1", "b")}) == 1

    def test_different_ids(self):
        assert ProjectRef("P1") != ProjectRef("P2")


class TestAgentPool:
    """Tests for AgentPool."""

    def test_from_schema(self):
        schema = AgentPoolSchema.model_validate(
            {
                "id": 3,
                "name": "linux",
                "maxAgents": 5,
                "projects": {"project": [{"id": "P1", "name": "Project One"}]},
            }
        )
        pool = AgentPool.from_schema(schema)
        assert pool.id == 3
        assert pool.max_agents == 5
        assert pool.has_project("P1")
        assert not pool.is_default

    def test_from_schema_without_projects(self):
        pool = AgentPool.from_schema(AgentPoolSchema.model_validate({"id": 0, "name": "Default"}))
        assert pool.projects == frozenset()
        assert pool.max_agents is None
        assert pool.is_default

    def test_to_schema(self):
        pool = AgentPool(id=1, name="p", projects=frozenset({ProjectRef("B"), ProjectRef("A")}))
        data = pool.to_schema().model_dump(by_alias=True, exclude_none=True)
        assert data == {
            "id": 1,
            "name": "p",
            "projects": {
                "count": 2,
                "project": [{"id": "A", "name": ""}, {"id": "B", "name": ""}],
            },
        }


class TestDefaultPoolGuard:
    """Tests for the Default pool guard."""

    def test_rejects_default(self):
        with pytest.raises(InvalidOperationError, match="Default"):
            ensure_not_default_pool(DEFAULT_POOL_ID, "delete")

    def test_allows_other_pools(self):
        ensure_not_default_pool(7, "delete")


class TestPoolProjectAssignment:
    """Tests for the assignment listing view."""

    def test_accepts_both_list_keys(self):
        singular = AgentPoolList.model_validate({"count": 1, "agentPool": [{"id": 0, "name": "Default"}]})
        plural = AgentPoolList.model_validate({"count": 1, "agentPools": [{"id": 0, "name": "Default"}]})
        assert singular == plural

    def test_from_schema(self):
        data = AgentPoolList.model_validate(
            {"count": 2, "agentPools": [{"id": 0, "name": "Default"}, {"id": 4, "name": "gpu"}]}
        )
        assignment = PoolProjectAssignment.from_schema("P1", data)
        assert assignment.count == 2
        assert assignment.pool_ids == {0, 4}
        assert assignment.includes(4)

    def test_to_schema_writes_plural_key(self):
        assignment = PoolProjectAssignment("P1", (AgentPool(id=0, name="Default"),))
        data = assignment.to_schema().model_dump(by_alias=True, exclude_none=True)
        assert data["count"] == len(data["agentPools"]) == 1


class TestAgentPoolCreate:
    """Tests for the creation request body."""

    def test_unlimited_omits_max_agents(self):
        body = AgentPoolCreate(name="pool").model_dump(by_alias=True, exclude_none=True)
        assert body == {"name": "pool"}

    def test_with_max_agents(self):
        body = AgentPoolCreate(name="pool", max_agents=2).model_dump(by_alias=True, exclude_none=True)
        assert body == {"name": "pool", "maxAgents": 2}
