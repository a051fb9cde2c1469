from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Selection(BaseModel):
    """Snapshot of the editor selection as received from the host.

    Line numbers are 0-based, the way editors report them. Use
    ``first_line``/``last_line`` for the 1-based values that appear in links.
    """

    model_config = ConfigDict(frozen=True)

    file_path: str
    start_line: int = Field(ge=0)
    end_line: int = Field(ge=0)
    selected_text: str

    @model_validator(mode="after")
    def validate_range(self) -> Selection:
        if self.end_line < self.start_line:
            raise ValueError(
                f"end_line ({self.end_line}) must not be before start_line ({self.start_line})"
            )
        return self

    @property
    def first_line(self) -> int:
        return self.start_line + 1

    @property
    def last_line(self) -> int:
        return self.end_line + 1


class ResolutionRequest(BaseModel):
    """Inputs for a single base URL resolution.

    An empty or missing ``api_endpoint`` selects local remote mode, in which
    ``local_remote_hint`` (the repository root) is required.
    """

    api_endpoint: str | None = None
    project_name: str
    force_refresh: bool = False
    local_remote_hint: str | None = None


class LinkArtifact(BaseModel):
    """The rendered link and snippet handed back to the host."""

    display_name: str
    url: str
    text: str


class LookupResponse(BaseModel):
    """Body returned by the lookup service. Extra fields are ignored."""

    original_url: str | None = None
