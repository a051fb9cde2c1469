"""File extension to fenced code block language tag."""

from __future__ import annotations

import os

LANGUAGE_TAGS: dict[str, str] = {
    "sol": "solidity",
    "py": "python",
    "js": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "jsx": "javascript",
    "go": "go",
    "rs": "rust",
    "md": "markdown",
    "json": "json",
    "yaml": "yaml",
    "yml": "yaml",
    "sh": "bash",
    "bash": "bash",
    "zsh": "bash",
    "css": "css",
    "scss": "scss",
    "html": "html",
    "vue": "vue",
    "java": "java",
    "c": "c",
    "cpp": "cpp",
    "h": "c",
    "hpp": "cpp",
}


def classify(filename: str) -> str:
    """Return the language tag for ``filename``.

    Unknown extensions are returned lowercased as-is; a file with no
    extension yields an empty string.
    """
    ext = os.path.splitext(filename)[1][1:].lower()
    return LANGUAGE_TAGS.get(ext, ext)
