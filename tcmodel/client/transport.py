"""Transport interface for agent pool operations.

The transport owns everything that happens on the wire: endpoints,
authentication, retries. It exchanges the JSON bodies described by
``tcmodel.schemas`` as plain dicts and reports server-side failures with
``tcmodel.errors`` exceptions.

Locators follow the server's syntax: ``id:<pool id>`` or ``name:<pool name>``.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class PoolTransport(Protocol):
    """Protocol for reading and writing agent pools on the server."""

    def create_pool(self, body: dict[str, Any]) -> dict[str, Any]:
        """Create a pool from an ``AgentPoolCreate`` body.

        Raises ``ConflictError`` if the name is taken.
        """
        ...

    def get_pool(self, locator: str) -> dict[str, Any]:
        """Read one pool.  Raises ``NotFoundError`` if no pool matches."""
        ...

    def delete_pool(self, pool_id: int) -> None:
        """Delete a pool and all of its project assignments."""
        ...

    def list_pools(self) -> dict[str, Any]:
        """Return an ``AgentPoolList`` body with every pool."""
        ...

    def list_pools_for_project(self, project_id: str) -> dict[str, Any]:
        """Return an ``AgentPoolList`` body with the pools holding a project."""
        ...

    def add_project(self, pool_id: int, project: dict[str, Any]) -> None:
        """Assign a project to a pool.  No-op if already assigned."""
        ...

    def remove_project(self, pool_id: int, project_id: str) -> None:
        """Unassign a project from a pool.  No-op if not assigned."""
        ...
