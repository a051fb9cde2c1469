"""Commit-pinned link and snippet rendering.

Output shape (consumers parse on it, so it must not change):

    [a.py](https://host/org/repo/blob/<rev>/src/a.py#L3-L5)

    ```python=3
    <selected text>
    ```

The ``=3`` after the language tag carries the snippet's first line number
for renderers that show line numbers.
"""

from __future__ import annotations

from codelink.languages import classify
from codelink.models.link import LinkArtifact

FENCE = "```"


def line_anchor(start_line: int, end_line: int) -> str:
    """``#L3`` for a single line, ``#L3-L5`` for a range. Lines are 1-based."""
    if start_line == end_line:
        return f"#L{start_line}"
    return f"#L{start_line}-L{end_line}"


def build_link_url(
    base_url: str,
    revision: str,
    relative_path: str,
    start_line: int,
    end_line: int,
) -> str:
    return (
        f"{base_url.rstrip('/')}/blob/{revision}/{relative_path}"
        f"{line_anchor(start_line, end_line)}"
    )


def render_snippet(filename: str, start_line: int, selected_text: str) -> str:
    """Fenced code block; always ends the body with a newline before the closing fence."""
    body = selected_text if selected_text.endswith("\n") else selected_text + "\n"
    return f"{FENCE}{classify(filename)}={start_line}\n{body}{FENCE}"


def build_link_artifact(
    base_url: str,
    revision: str,
    relative_path: str,
    filename: str,
    start_line: int,
    end_line: int,
    selected_text: str,
) -> LinkArtifact:
    url = build_link_url(base_url, revision, relative_path, start_line, end_line)
    display = f"[{filename}]({url})"
    text = f"{display}\n\n{render_snippet(filename, start_line, selected_text)}"
    return LinkArtifact(display_name=filename, url=url, text=text)
