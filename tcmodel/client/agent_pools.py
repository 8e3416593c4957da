"""Agent pool operations.

Usage:
    from tcmodel.client import AgentPools

    pools = AgentPools(transport)

    pool = pools.create("linux-builders", max_agents=4)
    pools.assign_project(pool.id, "MyProject")

    assignments = pools.list_for_project("MyProject")
    # -> Default and linux-builders
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ValidationError

from tcmodel.client.transport import PoolTransport
from tcmodel.errors import InvalidArgumentError
from tcmodel.logging import get_logger
from tcmodel.pools import (
    AgentPool,
    PoolProjectAssignment,
    ensure_not_default_pool,
)
from tcmodel.schemas.teamcity import (
    AgentPoolCreate,
    AgentPoolList,
    AgentPoolSchema,
    ProjectRefSchema,
)

logger = get_logger(__name__)


def pool_locator_by_id(pool_id: int) -> str:
    return f"id:{pool_id}"


def pool_locator_by_name(name: str) -> str:
    return f"name:{name}"


def _parse(schema: type[BaseModel], data: Any) -> Any:
    try:
        return schema.model_validate(data)
    except ValidationError as exc:
        raise InvalidArgumentError(f"Malformed {schema.__name__} payload: {exc}") from exc


class AgentPools:
    """Agent pool operations over a ``PoolTransport``.

    Errors reported by the transport are propagated unchanged; nothing is
    retried here.

    Args:
        transport: The collaborator that talks to the server.
    """

    def __init__(self, transport: PoolTransport):
        self._transport = transport

    # -------------------------------------------------------------------------
    # Pools
    # -------------------------------------------------------------------------

    def create(self, name: str, max_agents: int | None = None) -> AgentPool:
        """Create an agent pool.

        Args:
            name: Unique pool name.
            max_agents: Agent limit; ``None`` leaves the pool unlimited.

        Returns:
            The created AgentPool with its server-assigned id.

        Raises:
            InvalidArgumentError: If the name is empty or the limit negative.
            ConflictError: If a pool with this name already exists.
        """
        try:
            request = AgentPoolCreate(name=name, max_agents=max_agents)
        except ValidationError as exc:
            raise InvalidArgumentError(f"Invalid agent pool '{name}': {exc}") from exc

        data = self._transport.create_pool(request.model_dump(by_alias=True, exclude_none=True))
        pool = AgentPool.from_schema(_parse(AgentPoolSchema, data))
        logger.info("agent_pool_created", pool_id=pool.id, name=pool.name, max_agents=pool.max_agents)
        return pool

    def get_by_id(self, pool_id: int) -> AgentPool:
        """Get a pool by id.

        Raises:
            NotFoundError: If no pool has this id.
        """
        data = self._transport.get_pool(pool_locator_by_id(pool_id))
        return AgentPool.from_schema(_parse(AgentPoolSchema, data))

    def get_by_name(self, name: str) -> AgentPool:
        """Get a pool by name.

        Raises:
            NotFoundError: If no pool has this name.
        """
        data = self._transport.get_pool(pool_locator_by_name(name))
        return AgentPool.from_schema(_parse(AgentPoolSchema, data))

    def delete(self, pool_id: int) -> None:
        """Delete a pool together with its project assignments.

        Raises:
            InvalidOperationError: If ``pool_id`` is the Default pool.
            NotFoundError: If no pool has this id.
        """
        ensure_not_default_pool(pool_id, "delete")
        self._transport.delete_pool(pool_id)
        logger.info("agent_pool_deleted", pool_id=pool_id)

    def list(self) -> list[AgentPool]:
        """List all pools, Default included. Order is not meaningful."""
        data = _parse(AgentPoolList, self._transport.list_pools())
        return [AgentPool.from_schema(p) for p in data.agent_pools]

    # -------------------------------------------------------------------------
    # Project assignment
    # -------------------------------------------------------------------------

    def list_for_project(self, project_id: str) -> PoolProjectAssignment:
        """Get every pool the project belongs to, Default included."""
        data = _parse(AgentPoolList, self._transport.list_pools_for_project(project_id))
        return PoolProjectAssignment.from_schema(project_id, data)

    def assign_project(self, pool_id: int, project_id: str) -> None:
        """Add a project to a pool.

        Idempotent. Other memberships of the project are left alone.

        Raises:
            NotFoundError: If the pool or the project does not exist.
        """
        body = ProjectRefSchema(id=project_id).model_dump(include={"id"})
        self._transport.add_project(pool_id, body)
        logger.info("project_assigned", pool_id=pool_id, project_id=project_id)

    def unassign_project(self, pool_id: int, project_id: str) -> None:
        """Remove a project from a pool. No-op if it is not assigned.

        Raises:
            InvalidOperationError: If ``pool_id`` is the Default pool.
            NotFoundError: If the pool does not exist.
        """
        ensure_not_default_pool(pool_id, "unassign projects from")
        self._transport.remove_project(pool_id, project_id)
        logger.info("project_unassigned", pool_id=pool_id, project_id=project_id)

    def contains_project(self, pool_id: int, project_id: str) -> bool:
        """Check whether a pool currently holds a project."""
        return self.get_by_id(pool_id).has_project(project_id)
