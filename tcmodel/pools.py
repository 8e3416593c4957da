"""Agent pools and their project assignments.

Projects and agent pools form a many-to-many relation. Membership is
additive: assigning a project to a pool never removes it from the pools it
already belongs to. The Default pool (id ``0``) is created by the server,
cannot be deleted and holds every project.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tcmodel.errors import InvalidOperationError
from tcmodel.schemas.teamcity import (
    AgentPoolList,
    AgentPoolSchema,
    ProjectRefSchema,
    Projects,
)

DEFAULT_POOL_ID = 0
DEFAULT_POOL_NAME = "Default"


def is_default_pool(pool_id: int) -> bool:
    return pool_id == DEFAULT_POOL_ID


def ensure_not_default_pool(pool_id: int, action: str) -> None:
    """Reject ``action`` on the Default pool.

    Raises:
        InvalidOperationError: If ``pool_id`` is the Default pool.
    """
    if is_default_pool(pool_id):
        raise InvalidOperationError(f"Cannot {action} the {DEFAULT_POOL_NAME} agent pool")


@dataclass(frozen=True)
class ProjectRef:
    """Reference to a project. Identity is the project id alone."""

    id: str
    name: str = field(default="", compare=False)

    @classmethod
    def from_schema(cls, data: ProjectRefSchema) -> ProjectRef:
        return cls(id=data.id, name=data.name)

    def to_schema(self) -> ProjectRefSchema:
        return ProjectRefSchema(id=self.id, name=self.name)


@dataclass(frozen=True)
class AgentPool:
    """An agent pool.

    ``max_agents`` of ``None`` means the pool is unlimited.
    """

    id: int
    name: str
    max_agents: int | None = None
    projects: frozenset[ProjectRef] = frozenset()

    @property
    def is_default(self) -> bool:
        return is_default_pool(self.id)

    @property
    def project_ids(self) -> frozenset[str]:
        return frozenset(p.id for p in self.projects)

    def has_project(self, project_id: str) -> bool:
        return project_id in self.project_ids

    @classmethod
    def from_schema(cls, data: AgentPoolSchema) -> AgentPool:
        projects = data.projects.project if data.projects is not None else []
        return cls(
            id=data.id,
            name=data.name,
            max_agents=data.max_agents,
            projects=frozenset(ProjectRef.from_schema(p) for p in projects),
        )

    def to_schema(self) -> AgentPoolSchema:
        refs = sorted(self.projects, key=lambda p: p.id)
        return AgentPoolSchema(
            id=self.id,
            name=self.name,
            max_agents=self.max_agents,
            projects=Projects(count=len(refs), project=[p.to_schema() for p in refs]),
        )


@dataclass(frozen=True)
class PoolProjectAssignment:
    """The pools a single project belongs to."""

    project_id: str
    agent_pools: tuple[AgentPool, ...] = ()

    @property
    def count(self) -> int:
        return len(self.agent_pools)

    @property
    def pool_ids(self) -> frozenset[int]:
        return frozenset(p.id for p in self.agent_pools)

    def includes(self, pool_id: int) -> bool:
        return pool_id in self.pool_ids

    @classmethod
    def from_schema(cls, project_id: str, data: AgentPoolList) -> PoolProjectAssignment:
        return cls(
            project_id=project_id,
            agent_pools=tuple(AgentPool.from_schema(p) for p in data.agent_pools),
        )

    def to_schema(self) -> AgentPoolList:
        return AgentPoolList(
            count=self.count,
            agent_pools=[p.to_schema() for p in self.agent_pools],
        )
