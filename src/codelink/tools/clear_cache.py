"""Tool handler for clear_cache."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from codelink.errors import CodeLinkError, ErrorCode
from codelink.models.tools import ClearCacheOutput

if TYPE_CHECKING:
    from codelink.state import AppState


async def handle(project_name: str | None, state: AppState) -> dict:
    """Drop every cached base URL, or only ``project_name``'s when given."""
    log = structlog.get_logger().bind(tool="clear_cache", project=project_name)
    log.info("handler_called")

    if project_name is not None:
        if not project_name.strip():
            raise CodeLinkError(
                code=ErrorCode.INVALID_INPUT,
                message="project_name must not be empty.",
                suggestion="Omit project_name to clear every cached project.",
            )
        cleared = 1 if state.cache.invalidate(project_name) else 0
        message = f"Cache cleared for '{project_name}'"
    else:
        cleared = state.cache.clear_all()
        message = "Cache cleared"

    log.info("cache_cleared", cleared=cleared)
    return ClearCacheOutput(cleared=cleared, message=message).model_dump(mode="json")
