"""Application state container.

AppState is created once at server startup (inside the FastMCP lifespan context
manager) and injected into every tool handler via the MCP Context object. The
URL cache lives here, so its lifetime is the server process.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from codelink.config import Settings
    from codelink.protocols import CacheProtocol, InspectorProtocol
    from codelink.resolver import UrlResolver


@dataclass
class AppState:
    """Holds all shared runtime state. Passed to every tool handler."""

    settings: Settings
    cache: CacheProtocol
    inspector: InspectorProtocol
    resolver: UrlResolver
    http_client: httpx.AsyncClient | None = None
