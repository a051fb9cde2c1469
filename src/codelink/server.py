"""MCP server entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Create AppState via the FastMCP lifespan context manager
- Register tools
- Start the stdio transport
"""

from __future__ import annotations

import json
import logging
import sys
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult, TextContent

import codelink.tools.clear_cache as t_clear_cache
import codelink.tools.copy_code_link as t_copy_link
from codelink import __version__
from codelink.cache import UrlCache
from codelink.config import Settings
from codelink.errors import CodeLinkError
from codelink.git import GitInspector
from codelink.lookup import LookupClient, build_http_client
from codelink.resolver import UrlResolver
from codelink.state import AppState

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    import httpx

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # Logs go to stderr; stdout is reserved for the MCP JSON-RPC stream
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


def build_state(settings: Settings, http_client: httpx.AsyncClient | None = None) -> AppState:
    """Wire cache, inspector, lookup client and resolver from settings."""
    if http_client is None:
        http_client = build_http_client(settings.lookup.timeout_seconds)

    cache = UrlCache()
    inspector = GitInspector(
        executable=settings.git.executable,
        remote_name=settings.git.remote_name,
        timeout_seconds=settings.git.timeout_seconds,
    )
    resolver = UrlResolver(
        cache,
        inspector,
        LookupClient(http_client),
        cache_timeout_seconds=settings.cache.timeout_seconds,
    )
    return AppState(
        settings=settings,
        cache=cache,
        inspector=inspector,
        resolver=resolver,
        http_client=http_client,
    )


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncGenerator[AppState, None]:
    """Create and tear down all shared resources for the server's lifetime."""
    settings = Settings()
    _setup_logging(settings)

    state = build_state(settings)
    log.info(
        "server_started",
        version=__version__,
        mode="lookup_api" if settings.lookup.api_endpoint else "local_remote",
        cache_timeout_seconds=settings.cache.timeout_seconds,
    )

    try:
        yield state
    finally:
        if state.http_client is not None:
            await state.http_client.aclose()
        log.info("server_stopping")


# ---------------------------------------------------------------------------
# FastMCP instance and tool registration
# ---------------------------------------------------------------------------

mcp = FastMCP("codelink", lifespan=lifespan)
# FastMCP doesn't expose a version kwarg; set it on the underlying Server
# so the MCP initialize handshake reports our version, not the SDK's.
mcp._mcp_server.version = __version__  # pyright: ignore[reportPrivateUsage]


def _serialise_tool_error(error: CodeLinkError) -> CallToolResult:
    """Convert a CodeLinkError to the MCP tool error result envelope."""
    return CallToolResult(
        content=[TextContent(type="text", text=json.dumps(error.to_dict()))],
        isError=True,
    )


async def _copy_code_link(
    ctx: Context,
    tool: str,
    file_path: str,
    start_line: int,
    end_line: int,
    selected_text: str,
    workspace_root: str | None,
    *,
    force_refresh: bool,
) -> object:
    state: AppState = ctx.request_context.lifespan_context
    try:
        return await t_copy_link.handle(
            file_path,
            start_line,
            end_line,
            selected_text,
            state,
            force_refresh=force_refresh,
            workspace_root=workspace_root,
        )
    except CodeLinkError as exc:
        log.warning(
            "tool_error",
            tool=tool,
            code=exc.code,
            message=exc.message,
            recoverable=exc.recoverable,
        )
        return _serialise_tool_error(exc)
    except Exception:
        log.error("tool_unexpected_error", tool=tool, exc_info=True)
        raise


@mcp.tool()
async def copy_code_link(
    file_path: str,
    start_line: int,
    end_line: int,
    selected_text: str,
    ctx: Context,
    workspace_root: str | None = None,
) -> object:
    """Build a commit-pinned link and fenced snippet for an editor selection.

    Line numbers are 0-based, as reported by the editor. Returns the Markdown
    text to place on the clipboard and a message to show the user.
    """
    return await _copy_code_link(
        ctx,
        "copy_code_link",
        file_path,
        start_line,
        end_line,
        selected_text,
        workspace_root,
        force_refresh=False,
    )


@mcp.tool()
async def copy_code_link_force_refresh(
    file_path: str,
    start_line: int,
    end_line: int,
    selected_text: str,
    ctx: Context,
    workspace_root: str | None = None,
) -> object:
    """Same as copy_code_link, but re-resolves the project URL instead of using the cache."""
    return await _copy_code_link(
        ctx,
        "copy_code_link_force_refresh",
        file_path,
        start_line,
        end_line,
        selected_text,
        workspace_root,
        force_refresh=True,
    )


@mcp.tool()
async def clear_cache(ctx: Context, project_name: str | None = None) -> object:
    """Forget cached project URLs, for every project or only the one named."""
    state: AppState = ctx.request_context.lifespan_context
    try:
        return await t_clear_cache.handle(project_name, state)
    except CodeLinkError as exc:
        log.warning("tool_error", tool="clear_cache", code=exc.code, message=exc.message)
        return _serialise_tool_error(exc)
    except Exception:
        log.error("tool_unexpected_error", tool="clear_cache", exc_info=True)
        raise


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
