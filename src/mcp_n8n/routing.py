"""
Tool routing and registration for the n8n MCP Server.

This module provides:
- ToolDefinition: the descriptor advertised by tools/list
- ToolRegistry: maps tool names to descriptors and handler functions
- Handler dispatch with error wrapping
"""

from __future__ import annotations

import copy
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from mcp_n8n.errors import InternalError, MethodNotFoundError, ToolError
from mcp_n8n.logging import get_logger

if TYPE_CHECKING:
    from mcp_n8n.context import ToolContext

logger = get_logger(__name__)

# A tool handler receives the call context and the "arguments" object and
# returns an MCP tool result ({"content": [...]}).
ToolHandler = Callable[["ToolContext", dict[str, Any]], Awaitable[dict[str, Any]]]


@dataclass(frozen=True)
class ToolDefinition:
    """
    Static descriptor of a tool.

    Attributes:
        name: Tool name (e.g., "list_nodes").
        description: One-line description shown to the client.
        input_schema: JSON schema of the tool's arguments object.
    """

    name: str
    description: str
    input_schema: dict[str, Any] = field(
        default_factory=lambda: {"type": "object", "properties": {}}
    )

    def to_dict(self) -> dict[str, Any]:
        """Return the MCP wire form of the descriptor (a fresh copy)."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": copy.deepcopy(self.input_schema),
        }


class ToolRegistry:
    """
    Registry for mapping tool names to handler functions.

    Registration order is preserved, so tools/list always returns the tools
    in the order they were registered.

    Example:
        >>> registry = ToolRegistry()
        >>> registry.register(ToolDefinition("list_nodes", "List nodes"), handler)
        >>> result = await registry.invoke("list_nodes", ctx, {})
    """

    def __init__(self) -> None:
        self._definitions: dict[str, ToolDefinition] = {}
        self._handlers: dict[str, ToolHandler] = {}

    def register(self, definition: ToolDefinition, handler: ToolHandler) -> None:
        """
        Register a tool handler under its descriptor's name.

        Raises:
            ValueError: If a handler is already registered for the name.
        """
        if definition.name in self._handlers:
            raise ValueError(f"Tool '{definition.name}' is already registered")
        self._definitions[definition.name] = definition
        self._handlers[definition.name] = handler

    def has_tool(self, name: str) -> bool:
        """Check if a tool is registered."""
        return name in self._handlers

    def get_handler(self, name: str) -> ToolHandler | None:
        """Get the handler for a tool by name, or None if not found."""
        return self._handlers.get(name)

    def list_tools(self) -> list[dict[str, Any]]:
        """
        List the descriptors of all registered tools in wire form.

        Returns:
            A new list of new dicts on every call.
        """
        return [definition.to_dict() for definition in self._definitions.values()]

    def tool_names(self) -> list[str]:
        """List the names of all registered tools."""
        return list(self._handlers)

    async def invoke(
        self,
        name: str,
        ctx: ToolContext,
        arguments: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Invoke a tool handler by name.

        Raises:
            MethodNotFoundError: If the tool is not registered.
            ToolError: If the handler raises one.
            InternalError: If the handler raises anything else.
        """
        handler = self.get_handler(name)
        if handler is None:
            raise MethodNotFoundError(
                message=f"Tool not found: {name}",
                details={"tool": name},
            )

        try:
            return await handler(ctx, arguments)
        except ToolError:
            raise
        except Exception as e:
            logger.exception(
                "Unexpected error in tool handler",
                extra={"tool": name, "request_id": ctx.request_id},
            )
            raise InternalError(
                message=f"Internal error in tool '{name}': {e!s}",
                details={"tool": name, "exception_type": type(e).__name__},
            ) from e

    def __contains__(self, name: str) -> bool:
        return name in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
