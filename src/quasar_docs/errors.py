"""Error taxonomy shared by all tool handlers.

Tool handlers raise ``QuasarDocsError``; the server turns it into a structured
MCP tool error. Upstream (network) failures never get here: the fetcher
collapses them into "not found" / "empty" before they reach a handler.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    INVALID_INPUT = "INVALID_INPUT"
    COMPONENT_NOT_FOUND = "COMPONENT_NOT_FOUND"
    PAGE_NOT_FOUND = "PAGE_NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class QuasarDocsError(Exception):
    """Domain error carried back to the MCP client as a structured payload."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str = "",
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable

    def to_payload(self) -> dict[str, dict[str, str | bool]]:
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "suggestion": self.suggestion,
                "recoverable": self.recoverable,
            }
        }
