"""TeamCity wire schemas."""

from tcmodel.schemas.teamcity import (
    AgentPoolCreate,
    AgentPoolList,
    AgentPoolSchema,
    ProjectRefSchema,
    Projects,
    Properties,
    Property,
)

__all__ = [
    "AgentPoolCreate",
    "AgentPoolList",
    "AgentPoolSchema",
    "ProjectRefSchema",
    "Projects",
    "Properties",
    "Property",
]
