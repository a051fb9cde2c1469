"""Protocol interfaces for swappable components.

The resolver and tool handlers reference these protocols, not the concrete
implementations, so tests can pass in-memory fakes with call counters.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from codelink.git import GitQueryResult


class CacheProtocol(Protocol):
    """Interface for the resolved base URL cache."""

    def get(self, key: str, timeout_seconds: float) -> str | None: ...

    def put(self, key: str, value: str) -> None: ...

    def invalidate(self, key: str) -> bool: ...

    def clear_all(self) -> int: ...


class InspectorProtocol(Protocol):
    """Interface for the read-only repository queries."""

    async def find_root(self, start_dir: str) -> GitQueryResult: ...

    async def current_revision(self, root: str) -> GitQueryResult: ...

    async def remote_url(self, root: str) -> GitQueryResult: ...


class LookupProtocol(Protocol):
    """Interface for the project URL lookup service client."""

    async def fetch_original_url(self, api_endpoint: str, project_name: str) -> str | None: ...
