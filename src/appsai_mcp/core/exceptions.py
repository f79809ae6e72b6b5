"""Error types raised inside AppsAI MCP.

None of these reach the MCP client as exceptions: the server boundary turns
them into an empty tool list or an error ``CallToolResult``.
"""

from __future__ import annotations

from typing import Any


class AppsAIError(Exception):
    """Base exception for AppsAI MCP errors."""
    pass


class ConfigurationError(AppsAIError):
    """Raised when required configuration is missing or malformed."""
    pass


class AuthenticationError(AppsAIError):
    """Raised when the backend rejects the configured API key."""

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason or "Invalid API key"
        super().__init__(self.reason)


class MalformedInvocation(AppsAIError):
    """Raised when a tool name cannot be routed to a backend action."""
    pass


class BackendFailure(AppsAIError):
    """A failed call into the AppsAI backend.

    Attributes:
        code: Numeric status code reported by the backend (or -1 for
            transport errors that never produced a response)
        message: Human readable failure message
        data: Optional structured payload attached to the failure
    """

    def __init__(self, code: int, message: str, data: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data or {}

    def __repr__(self) -> str:
        return f"BackendFailure(code={self.code!r}, message={self.message!r})"


class CatalogUnavailable(AppsAIError):
    """Raised when the backend tool catalog could not be fetched."""
    pass
