"""Wire schema definitions.

These schemas mirror the JSON bodies the TeamCity REST API exchanges for
build parameters and agent pools. Field names are snake_case in Python and
camelCase on the wire; dump with ``by_alias=True, exclude_none=True`` to
reproduce the server's shape.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class WireModel(BaseModel):
    """Base for all wire models."""

    model_config = ConfigDict(populate_by_name=True)


# Parameters


class Property(WireModel):
    """A single stored parameter: prefixed name and value."""

    name: str = Field(..., description="Stored (prefixed) parameter name")
    value: str = Field(default="", description="Parameter value")
    inherited: bool | None = Field(
        default=None,
        description="Set by the server when the value comes from a parent project",
    )


class Properties(WireModel):
    """A flat bag of stored parameters."""

    count: int = Field(default=0, ge=0)
    property: list[Property] = Field(default_factory=list)


# Agent pools


class ProjectRefSchema(WireModel):
    """Reference to a project as embedded in an agent pool."""

    id: str
    name: str = ""


class Projects(WireModel):
    """Projects assigned to an agent pool."""

    count: int | None = None
    project: list[ProjectRefSchema] = Field(default_factory=list)


class AgentPoolSchema(WireModel):
    """An agent pool as read from the server."""

    id: int
    name: str
    max_agents: int | None = Field(default=None, alias="maxAgents")
    projects: Projects | None = None


class AgentPoolCreate(WireModel):
    """Request body for creating an agent pool."""

    name: str = Field(..., min_length=1, description="Unique pool name")
    max_agents: int | None = Field(
        default=None,
        alias="maxAgents",
        ge=0,
        description="Maximum number of agents; omitted means unlimited",
    )


class AgentPoolList(WireModel):
    """A counted list of agent pools.

    The server names the list ``agentPool``; assignment listings use
    ``agentPools``. Both are accepted on read, ``agentPools`` is written.
    """

    count: int = Field(default=0, ge=0)
    agent_pools: list[AgentPoolSchema] = Field(
        default_factory=list,
        validation_alias=AliasChoices("agentPools", "agentPool", "agent_pools"),
        serialization_alias="agentPools",
    )
