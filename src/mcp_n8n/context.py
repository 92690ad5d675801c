"""
Tool context management for the n8n MCP Server.

This module defines the ToolContext dataclass that carries the context of a
single MCP tool call: which tool, which request, which transport delivered it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass
class CallerInfo:
    """
    Describes where a request came from.

    Attributes:
        transport: "stdio" or "http".
        authenticated: Whether a valid bearer token was presented.
        ip_address: Client IP address (HTTP only).
    """

    transport: str = "stdio"
    authenticated: bool = False
    ip_address: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert CallerInfo to a dictionary for logging."""
        return {
            "transport": self.transport,
            "authenticated": self.authenticated,
            "ip_address": self.ip_address,
        }


@dataclass
class ToolContext:
    """
    Encapsulates the context of a single MCP tool call.

    This context is passed to every tool handler and is mostly used for
    logging.

    Attributes:
        tool_name: Tool name (e.g., "list_nodes").
        caller: CallerInfo describing the transport.
        request_id: Request identifier from the JSON-RPC request.
        timestamp: When the request was received (UTC).
    """

    tool_name: str
    caller: CallerInfo
    request_id: str | int | None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        """Convert ToolContext to a dictionary for logging."""
        return {
            "tool_name": self.tool_name,
            "caller": self.caller.to_dict(),
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def for_tool(
        cls,
        tool_name: str,
        request_id: str | int | None,
        caller: CallerInfo | None = None,
    ) -> ToolContext:
        """
        Create a ToolContext for a tools/call request.

        Example:
            >>> ctx = ToolContext.for_tool("list_nodes", 7)
            >>> ctx.caller.transport
            'stdio'
        """
        return cls(
            tool_name=tool_name,
            caller=caller or CallerInfo(),
            request_id=request_id,
            timestamp=datetime.now(UTC),
        )
