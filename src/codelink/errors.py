from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    NO_ACTIVE_EDITOR = "NO_ACTIVE_EDITOR"
    EMPTY_SELECTION = "EMPTY_SELECTION"
    INVALID_INPUT = "INVALID_INPUT"
    NOT_A_REPOSITORY = "NOT_A_REPOSITORY"
    REVISION_UNAVAILABLE = "REVISION_UNAVAILABLE"
    FILE_OUTSIDE_REPOSITORY = "FILE_OUTSIDE_REPOSITORY"
    API_LOOKUP_FAILED = "API_LOOKUP_FAILED"
    LOCAL_REMOTE_LOOKUP_FAILED = "LOCAL_REMOTE_LOOKUP_FAILED"


class CodeLinkError(Exception):
    """Raised for every expected failure of a user-triggered action.

    Tool handlers raise it; server.py catches it and serialises it into the
    MCP error response. The lookup client also raises it, but the resolver
    absorbs those so they never reach a handler.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "suggestion": self.suggestion,
                "recoverable": self.recoverable,
            }
        }
