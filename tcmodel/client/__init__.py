"""Agent pool client.

Provides the agent pool operations, the transport protocol they run over
and an in-memory transport.
"""

from tcmodel.client.agent_pools import AgentPools
from tcmodel.client.memory import InMemoryPoolTransport
from tcmodel.client.transport import PoolTransport

__all__ = ["AgentPools", "InMemoryPoolTransport", "PoolTransport"]
