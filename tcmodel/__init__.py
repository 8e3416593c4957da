"""tcmodel: TeamCity build parameters and agent pool membership."""

from tcmodel.errors import (
    ConflictError,
    InvalidArgumentError,
    InvalidOperationError,
    NotFoundError,
    TeamCityModelError,
)
from tcmodel.parameters import (
    Parameter,
    ParameterCollection,
    ParameterKind,
    decode_name,
    encode_name,
)
from tcmodel.pools import (
    DEFAULT_POOL_ID,
    DEFAULT_POOL_NAME,
    AgentPool,
    PoolProjectAssignment,
    ProjectRef,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_POOL_ID",
    "DEFAULT_POOL_NAME",
    "AgentPool",
    "ConflictError",
    "InvalidArgumentError",
    "InvalidOperationError",
    "NotFoundError",
    "Parameter",
    "ParameterCollection",
    "ParameterKind",
    "PoolProjectAssignment",
    "ProjectRef",
    "TeamCityModelError",
    "__version__",
    "decode_name",
    "encode_name",
]
