"""
Error types for the n8n MCP Server.

Domain errors raised by tool handlers and the authentication gate are
expressed as ToolError subclasses. They are mapped to JSON-RPC error objects
in a single place (mcp_n8n.protocol.tool_error_to_jsonrpc_error).
"""

from __future__ import annotations

from typing import Any


class ToolError(Exception):
    """
    Base exception class for MCP tool errors.

    Attributes:
        error_code: Internal error code string (e.g., "invalid_argument",
            "method_not_found", "unauthenticated", "internal").
        message: Human-readable error message.
        details: Optional structured details (e.g., the offending argument).

    Example:
        >>> raise ToolError(
        ...     error_code="invalid_argument",
        ...     message="Unknown template: data_lake",
        ...     details={"templateName": "data_lake"},
        ... )
    """

    def __init__(
        self,
        error_code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.message = message
        self.details = details or {}

    def __repr__(self) -> str:
        """Return a detailed string representation."""
        return (
            f"{self.__class__.__name__}("
            f"error_code={self.error_code!r}, "
            f"message={self.message!r}, "
            f"details={self.details!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert the error to a dictionary for serialization."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class InvalidArgumentError(ToolError):
    """
    Raised when a tool receives arguments it cannot work with.

    Used for a missing workflow object and for unknown workflow types or
    template names.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            error_code="invalid_argument", message=message, details=details
        )


class MethodNotFoundError(ToolError):
    """Raised when an MCP method or a tool name is not registered."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            error_code="method_not_found", message=message, details=details
        )


class UnauthenticatedError(ToolError):
    """
    Raised by the HTTP transport when the bearer token is missing or wrong.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            error_code="unauthenticated", message=message, details=details
        )


class InternalError(ToolError):
    """
    Raised for unexpected failures inside a handler.

    The original exception is chained and logged with its stack trace.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(error_code="internal", message=message, details=details)
