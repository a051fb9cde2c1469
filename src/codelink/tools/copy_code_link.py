"""Tool handler for copy_code_link and copy_code_link_force_refresh.

Receives AppState, walks selection → repository → base URL → artifact, and
returns a structured dict. Every failure becomes a CodeLinkError with a
message meant for the user; this is the only layer that writes those
messages. No MCP imports; server.py handles the MCP wiring.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from codelink.builder import build_link_artifact, line_anchor
from codelink.errors import CodeLinkError, ErrorCode
from codelink.models.link import ResolutionRequest, Selection
from codelink.models.tools import CopyCodeLinkOutput

if TYPE_CHECKING:
    from codelink.state import AppState


def _relative_path(file_path: str, root: str) -> str | None:
    """Repository-relative path with forward slashes, or None if outside ``root``.

    Only the parent directory is resolved: a tracked symlink keeps its own
    name instead of turning into its target.
    """
    path = Path(file_path)
    try:
        return (path.parent.resolve() / path.name).relative_to(Path(root).resolve()).as_posix()
    except ValueError:
        return None


def _validate_selection(
    file_path: str, start_line: int, end_line: int, selected_text: str
) -> Selection:
    if not file_path:
        raise CodeLinkError(
            code=ErrorCode.NO_ACTIVE_EDITOR,
            message="No file is open in the editor.",
            suggestion="Open a file and select the code to link.",
        )
    if not selected_text:
        raise CodeLinkError(
            code=ErrorCode.EMPTY_SELECTION,
            message="The selection is empty.",
            suggestion="Select a piece of code first.",
        )
    try:
        return Selection(
            file_path=file_path,
            start_line=start_line,
            end_line=end_line,
            selected_text=selected_text,
        )
    except ValueError as exc:
        raise CodeLinkError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Line numbers are 0-based and end_line must not precede start_line.",
        ) from exc


async def handle(
    file_path: str,
    start_line: int,
    end_line: int,
    selected_text: str,
    state: AppState,
    *,
    force_refresh: bool = False,
    workspace_root: str | None = None,
) -> dict:
    """Handle a copy_code_link tool call."""
    log = structlog.get_logger().bind(
        tool="copy_code_link", file_path=file_path, force_refresh=force_refresh
    )
    log.info("handler_called")

    selection = _validate_selection(file_path, start_line, end_line, selected_text)

    # Relative paths are relative to the workspace root when one is given
    absolute_path = os.path.abspath(
        os.path.join(workspace_root or os.getcwd(), selection.file_path)
    )
    cwd = workspace_root or os.path.dirname(absolute_path)
    root_result = await state.inspector.find_root(cwd)
    if not root_result.ok:
        raise CodeLinkError(
            code=ErrorCode.NOT_A_REPOSITORY,
            message=f"'{cwd}' is not inside a git repository.",
            suggestion="Open a file that belongs to a git repository.",
        )
    root = root_result.value

    relative_path = _relative_path(absolute_path, root)
    if relative_path is None:
        raise CodeLinkError(
            code=ErrorCode.FILE_OUTSIDE_REPOSITORY,
            message=f"'{selection.file_path}' is not inside the repository at '{root}'.",
            suggestion="Pass the workspace root of the repository the file belongs to.",
        )
    project_name = Path(root).name
    filename = Path(absolute_path).name

    revision_result = await state.inspector.current_revision(root)
    if not revision_result.ok:
        raise CodeLinkError(
            code=ErrorCode.REVISION_UNAVAILABLE,
            message=f"Could not determine the current git commit of '{project_name}'.",
            suggestion="Make sure the repository has at least one commit.",
            recoverable=True,
        )
    revision = revision_result.value

    api_endpoint = state.settings.lookup.api_endpoint
    base_url = await state.resolver.resolve(
        ResolutionRequest(
            api_endpoint=api_endpoint,
            project_name=project_name,
            force_refresh=force_refresh,
            local_remote_hint=root,
        )
    )
    if base_url is None:
        if api_endpoint:
            raise CodeLinkError(
                code=ErrorCode.API_LOOKUP_FAILED,
                message=f"Could not get the URL of '{project_name}' from the lookup API.",
                suggestion="Check the lookup endpoint and that it knows this project.",
                recoverable=True,
            )
        raise CodeLinkError(
            code=ErrorCode.LOCAL_REMOTE_LOOKUP_FAILED,
            message=f"Could not get the git remote URL of '{project_name}'.",
            suggestion="Configure a remote with 'git remote add origin <url>'.",
        )

    artifact = build_link_artifact(
        base_url,
        revision,
        relative_path,
        filename,
        selection.first_line,
        selection.last_line,
        selection.selected_text,
    )
    log.info("link_built", project=project_name, url=artifact.url)

    lines = line_anchor(selection.first_line, selection.last_line).removeprefix("#")
    output = CopyCodeLinkOutput(
        text=artifact.text,
        url=artifact.url,
        display_name=artifact.display_name,
        project_name=project_name,
        revision=revision,
        message=f"Copied to clipboard: {filename} {lines}",
    )
    return output.model_dump(mode="json")
