from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    PAGE_NOT_FOUND = "PAGE_NOT_FOUND"
    PAGE_FETCH_FAILED = "PAGE_FETCH_FAILED"
    COMPONENT_NOT_FOUND = "COMPONENT_NOT_FOUND"
    INVALID_INPUT = "INVALID_INPUT"


class DocsError(Exception):
    """Raised by tool handlers and the fetcher for all expected failures.

    Caught by server.py and serialised into the MCP tool error result.
    Business logic lets it propagate so the agent always receives a
    structured error with a suggestion instead of a crashed call.
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
            "error": self.message,
            "code": self.code,
            "suggestion": self.suggestion,
            "recoverable": self.recoverable,
        }


class FetchError(DocsError):
    """The remote documentation site could not be fetched."""

    reason = "remote fetch failed"

    def __init__(
        self,
        url: str,
        status_text: str,
        *,
        code: ErrorCode = ErrorCode.PAGE_FETCH_FAILED,
        suggestion: str = "The documentation site may be temporarily unavailable.",
        recoverable: bool = True,
    ) -> None:
        super().__init__(
            code=code,
            message=f"Failed to fetch {url}: {status_text}",
            suggestion=suggestion,
            recoverable=recoverable,
        )
        self.url = url
        self.status_text = status_text
