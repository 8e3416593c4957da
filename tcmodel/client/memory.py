"""In-memory PoolTransport.

Holds pool and project state the way the server does and enforces the same
rules:

- the Default pool (id 0) exists from the start and cannot be deleted
- pool names are unique
- every registered project is a member of Default
- assignment is additive and idempotent; unassignment of an absent project
  is a no-op

Used by the test suite and by callers that want to reason about membership
changes without a server.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock
from typing import Any

from pydantic import ValidationError

from tcmodel.errors import ConflictError, InvalidArgumentError, NotFoundError
from tcmodel.logging import get_logger
from tcmodel.pools import DEFAULT_POOL_ID, DEFAULT_POOL_NAME, ensure_not_default_pool
from tcmodel.schemas.teamcity import (
    AgentPoolCreate,
    AgentPoolList,
    AgentPoolSchema,
    ProjectRefSchema,
    Projects,
)

logger = get_logger(__name__)


@dataclass
class _PoolRecord:
    id: int
    name: str
    max_agents: int | None = None
    # insertion-ordered set of project ids
    project_ids: dict[str, None] = field(default_factory=dict)


class InMemoryPoolTransport:
    """PoolTransport backed by process memory."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._pools: dict[int, _PoolRecord] = {
            DEFAULT_POOL_ID: _PoolRecord(id=DEFAULT_POOL_ID, name=DEFAULT_POOL_NAME),
        }
        self._projects: dict[str, str] = {}
        self._next_id = DEFAULT_POOL_ID + 1

    # -- Projects --------------------------------------------------------------

    def register_project(self, project_id: str, name: str = "") -> None:
        """Make a project known to the server. New projects join Default."""
        with self._lock:
            if project_id in self._projects:
                raise ConflictError(f"Project '{project_id}' already exists")
            self._projects[project_id] = name or project_id
            self._pools[DEFAULT_POOL_ID].project_ids[project_id] = None
        logger.debug("project_registered", project_id=project_id)

    def unregister_project(self, project_id: str) -> None:
        """Forget a project and drop it from every pool."""
        with self._lock:
            if self._projects.pop(project_id, None) is None:
                raise NotFoundError(f"Project '{project_id}' not found")
            for record in self._pools.values():
                record.project_ids.pop(project_id, None)
        logger.debug("project_unregistered", project_id=project_id)

    # -- Pools -----------------------------------------------------------------

    def create_pool(self, body: dict[str, Any]) -> dict[str, Any]:
        try:
            request = AgentPoolCreate.model_validate(body)
        except ValidationError as exc:
            raise InvalidArgumentError(f"Invalid agent pool body: {exc}") from exc

        with self._lock:
            if any(r.name == request.name for r in self._pools.values()):
                raise ConflictError(f"Agent pool '{request.name}' already exists")
            record = _PoolRecord(
                id=self._next_id,
                name=request.name,
                max_agents=request.max_agents,
            )
            self._pools[record.id] = record
            self._next_id += 1
            return self._dump(record)

    def get_pool(self, locator: str) -> dict[str, Any]:
        with self._lock:
            return self._dump(self._find(locator))

    def delete_pool(self, pool_id: int) -> None:
        ensure_not_default_pool(pool_id, "delete")
        with self._lock:
            if self._pools.pop(pool_id, None) is None:
                raise NotFoundError(f"Agent pool {pool_id} not found")

    def list_pools(self) -> dict[str, Any]:
        with self._lock:
            return self._dump_list(list(self._pools.values()))

    def list_pools_for_project(self, project_id: str) -> dict[str, Any]:
        with self._lock:
            if project_id not in self._projects:
                raise NotFoundError(f"Project '{project_id}' not found")
            return self._dump_list([r for r in self._pools.values() if project_id in r.project_ids])

    def add_project(self, pool_id: int, project: dict[str, Any]) -> None:
        try:
            ref = ProjectRefSchema.model_validate(project)
        except ValidationError as exc:
            raise InvalidArgumentError(f"Invalid project reference: {exc}") from exc

        with self._lock:
            record = self._get(pool_id)
            if ref.id not in self._projects:
                raise NotFoundError(f"Project '{ref.id}' not found")
            record.project_ids[ref.id] = None

    def remove_project(self, pool_id: int, project_id: str) -> None:
        ensure_not_default_pool(pool_id, "unassign projects from")
        with self._lock:
            self._get(pool_id).project_ids.pop(project_id, None)

    # -- Helpers ---------------------------------------------------------------

    def _get(self, pool_id: int) -> _PoolRecord:
        record = self._pools.get(pool_id)
        if record is None:
            raise NotFoundError(f"Agent pool {pool_id} not found")
        return record

    def _find(self, locator: str) -> _PoolRecord:
        dimension, sep, value = locator.partition(":")
        if not sep:
            raise InvalidArgumentError(f"Invalid agent pool locator '{locator}'")
        if dimension == "id":
            try:
                pool_id = int(value)
            except ValueError as exc:
                raise InvalidArgumentError(f"Invalid agent pool id '{value}'") from exc
            return self._get(pool_id)
        if dimension == "name":
            for record in self._pools.values():
                if record.name == value:
                    return record
            raise NotFoundError(f"Agent pool '{value}' not found")
        raise InvalidArgumentError(f"Unsupported agent pool locator dimension '{dimension}'")

    def _dump(self, record: _PoolRecord) -> dict[str, Any]:
        refs = [ProjectRefSchema(id=pid, name=self._projects[pid]) for pid in record.project_ids]
        pool = AgentPoolSchema(
            id=record.id,
            name=record.name,
            max_agents=record.max_agents,
            projects=Projects(count=len(refs), project=refs),
        )
        return pool.model_dump(by_alias=True, exclude_none=True)

    def _dump_list(self, records: list[_PoolRecord]) -> dict[str, Any]:
        pools = [AgentPoolSchema.model_validate(self._dump(r)) for r in records]
        return AgentPoolList(count=len(pools), agent_pools=pools).model_dump(
            by_alias=True, exclude_none=True
        )
