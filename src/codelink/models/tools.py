from __future__ import annotations

from pydantic import BaseModel


class CopyCodeLinkOutput(BaseModel):
    text: str  # Markdown link + fenced snippet, ready for the clipboard
    url: str
    display_name: str
    project_name: str
    revision: str
    message: str


class ClearCacheOutput(BaseModel):
    cleared: int
    message: str
