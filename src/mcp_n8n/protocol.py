"""
JSON-RPC 2.0 protocol handling for the n8n MCP Server.

This module implements JSON-RPC 2.0 envelope parsing and response formatting
shared by the stdio and HTTP transports.

Features:
- JSON decoding separated from envelope validation, so the HTTP transport can
  read the request id before authenticating
- JSON-RPC 2.0 response formatting (success and error)
- ToolError to JSON-RPC error code mapping
- Notification detection based on the presence of the "id" member

Error Code Mapping:
- -32700: Parse error (malformed JSON)
- -32600: Invalid Request (missing/invalid jsonrpc, method, etc.)
- -32601: Method not found (unknown MCP method or tool)
- -32602: Invalid params (missing workflow, unknown workflow type/template)
- -32603: Internal error (unexpected handler failure)
- -32001: Unauthorized (HTTP bearer token missing or wrong)
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from mcp_n8n.errors import ToolError

# =============================================================================
# JSON-RPC Error Codes
# =============================================================================

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

UNAUTHORIZED = -32001

ERROR_CODE_MAP: dict[str, int] = {
    "invalid_argument": INVALID_PARAMS,
    "method_not_found": METHOD_NOT_FOUND,
    "unauthenticated": UNAUTHORIZED,
    "internal": INTERNAL_ERROR,
}

# Fallback for error codes without an explicit mapping
DEFAULT_SERVER_ERROR = -32000


# =============================================================================
# Data Classes
# =============================================================================


class JSONRPCError(Exception):
    """
    Represents a JSON-RPC 2.0 error object.

    This class is both an Exception (so it can be raised) and a data container
    for JSON-RPC error information.

    Attributes:
        code: Integer error code (JSON-RPC 2.0 reserved range or -32001).
        message: Human-readable error message.
        data: Optional structured error data.
    """

    def __init__(
        self,
        code: int,
        message: str,
        data: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the error to a dictionary for JSON serialization.

        Returns:
            Dictionary with code, message, and optionally data.
        """
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.data is not None:
            result["data"] = self.data
        return result

    def __repr__(self) -> str:
        """Return a detailed string representation."""
        return (
            f"JSONRPCError(code={self.code}, "
            f"message={self.message!r}, "
            f"data={self.data!r})"
        )


@dataclass
class JSONRPCRequest:
    """
    Represents a parsed JSON-RPC 2.0 request or notification.

    Attributes:
        jsonrpc: Protocol version (always "2.0").
        id: Request identifier (string, number or null).
        method: The MCP method to invoke (e.g., "tools/call").
        params: Parameters for the method (empty dict when absent).
        notification: True when the message carried no "id" member at all.
            An explicit ``"id": null`` is still a request.
    """

    jsonrpc: str
    id: str | int | None
    method: str
    params: dict[str, Any] = field(default_factory=dict)
    notification: bool = False

    @property
    def is_notification(self) -> bool:
        """Check if this message expects no response."""
        return self.notification


@dataclass
class JSONRPCResponse:
    """
    Represents a JSON-RPC 2.0 response.

    Either result or error is present, never both.
    """

    jsonrpc: str
    id: str | int | None
    result: Any | None = None
    error: JSONRPCError | None = None

    @property
    def is_error(self) -> bool:
        """Check if this is an error response."""
        return self.error is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert the response to a dictionary for JSON serialization."""
        response: dict[str, Any] = {
            "jsonrpc": self.jsonrpc,
            "id": self.id,
        }
        if self.error is not None:
            response["error"] = self.error.to_dict()
        else:
            response["result"] = self.result
        return response

    def to_json(self) -> str:
        """Serialize the response to a single-line JSON string."""
        return json.dumps(self.to_dict(), separators=(",", ":"))


# =============================================================================
# Request Parsing
# =============================================================================


def decode_message(request_json: str | bytes) -> Any:
    """
    Decode raw JSON text into a Python object.

    Args:
        request_json: Raw JSON text (one stdio line or one HTTP body).

    Returns:
        The decoded JSON value.

    Raises:
        JSONRPCError: With PARSE_ERROR if the text is not valid JSON.
    """
    try:
        return json.loads(request_json)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        reason = e.msg if isinstance(e, json.JSONDecodeError) else str(e)
        raise JSONRPCError(
            code=PARSE_ERROR,
            message=f"Parse error: Invalid JSON - {reason}",
        ) from e


def validate_envelope(data: Any) -> JSONRPCRequest:
    """
    Validate a decoded JSON value as a JSON-RPC 2.0 envelope.

    The jsonrpc member is checked before anything else, so an envelope
    without a valid version is rejected even when it has no id. Once the
    version is valid, a message without an id is a notification and is
    never rejected: its method and params are not checked.

    Args:
        data: Decoded JSON value.

    Returns:
        Parsed JSONRPCRequest object.

    Raises:
        JSONRPCError: With INVALID_REQUEST for a malformed envelope.
    """
    if not isinstance(data, dict):
        raise JSONRPCError(code=INVALID_REQUEST, message="Invalid Request")

    if data.get("jsonrpc") != "2.0":
        raise JSONRPCError(code=INVALID_REQUEST, message="Invalid Request")

    method = data.get("method")
    params = data.get("params")

    if "id" not in data:
        return JSONRPCRequest(
            jsonrpc="2.0",
            id=None,
            method=method if isinstance(method, str) else "",
            params=params if isinstance(params, dict) else {},
            notification=True,
        )

    if not isinstance(method, str) or not method:
        raise JSONRPCError(
            code=INVALID_REQUEST,
            message="Invalid Request: 'method' must be a non-empty string",
        )

    if params is None:
        params = {}
    elif not isinstance(params, dict):
        raise JSONRPCError(
            code=INVALID_PARAMS,
            message="Invalid params: 'params' must be an object",
        )

    return JSONRPCRequest(
        jsonrpc="2.0",
        id=data.get("id"),
        method=method,
        params=params,
    )


def parse_request(request_json: str | bytes) -> JSONRPCRequest:
    """
    Parse a JSON-RPC 2.0 request from raw JSON text.

    Example:
        >>> request = parse_request('{"jsonrpc":"2.0","id":1,"method":"tools/list"}')
        >>> print(request.method)
        tools/list
    """
    return validate_envelope(decode_message(request_json))


def extract_request_id(data: Any) -> str | int | None:
    """Best-effort id of a decoded message, used for early error responses."""
    if isinstance(data, dict):
        request_id = data.get("id")
        if isinstance(request_id, (str, int)) and not isinstance(request_id, bool):
            return request_id
    return None


# =============================================================================
# Response Formatting
# =============================================================================


def format_success_response(
    request_id: str | int | None,
    result: Any,
) -> JSONRPCResponse:
    """
    Format a successful JSON-RPC 2.0 response.

    Example:
        >>> response = format_success_response(1, {"prompts": []})
        >>> print(response.to_json())
        {"jsonrpc":"2.0","id":1,"result":{"prompts":[]}}
    """
    return JSONRPCResponse(
        jsonrpc="2.0",
        id=request_id,
        result=result,
        error=None,
    )


def format_error_response(
    request_id: str | int | None,
    error: JSONRPCError,
) -> JSONRPCResponse:
    """
    Format a JSON-RPC 2.0 error response.

    Args:
        request_id: The request ID (None for parse and envelope errors).
        error: The JSONRPCError object describing the error.
    """
    return JSONRPCResponse(
        jsonrpc="2.0",
        id=request_id,
        result=None,
        error=error,
    )


# =============================================================================
# ToolError to JSON-RPC Error Mapping
# =============================================================================


def tool_error_to_jsonrpc_error(tool_error: ToolError) -> JSONRPCError:
    """
    Convert a ToolError to a JSONRPCError.

    Example:
        >>> from mcp_n8n.errors import InvalidArgumentError
        >>> err = InvalidArgumentError("Unknown workflow type: foo")
        >>> tool_error_to_jsonrpc_error(err).code
        -32602
    """
    jsonrpc_code = ERROR_CODE_MAP.get(tool_error.error_code, DEFAULT_SERVER_ERROR)

    data: dict[str, Any] | None = None
    if tool_error.details:
        data = {
            "error_code": tool_error.error_code,
            "details": tool_error.details,
        }

    return JSONRPCError(
        code=jsonrpc_code,
        message=tool_error.message,
        data=data,
    )


def create_internal_error(
    message: str, details: dict[str, Any] | None = None
) -> JSONRPCError:
    """Create an internal error (-32603) for unexpected exceptions."""
    return JSONRPCError(
        code=INTERNAL_ERROR,
        message=message,
        data={
            "error_code": "internal",
            "details": details or {},
        },
    )
