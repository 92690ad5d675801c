"""
MCP method dispatch for the n8n MCP Server.

The dispatcher maps MCP method names (initialize, tools/list, tools/call,
resources/list, prompts/list, ping) to handlers and turns a decoded JSON-RPC
message into a response. It keeps no state between calls and is shared by
the stdio and HTTP transports.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from mcp_n8n.config import CatalogConfig
from mcp_n8n.context import CallerInfo, ToolContext
from mcp_n8n.errors import InvalidArgumentError, MethodNotFoundError, ToolError
from mcp_n8n.logging import get_logger
from mcp_n8n.protocol import (
    INVALID_REQUEST,
    JSONRPCError,
    JSONRPCRequest,
    JSONRPCResponse,
    create_internal_error,
    extract_request_id,
    format_error_response,
    format_success_response,
    tool_error_to_jsonrpc_error,
    validate_envelope,
)
from mcp_n8n.routing import ToolRegistry
from mcp_n8n.tools import create_registry

logger = get_logger(__name__)

MethodHandler = Callable[[JSONRPCRequest, CallerInfo], Awaitable[Any]]


class MCPDispatcher:
    """
    Routes JSON-RPC messages to MCP method handlers.

    Example:
        >>> dispatcher = MCPDispatcher()
        >>> response = await dispatcher.handle_message(
        ...     {"jsonrpc": "2.0", "id": 1, "method": "tools/list"}
        ... )
        >>> len(response.result["tools"])
        8
    """

    def __init__(
        self,
        registry: ToolRegistry | None = None,
        identity: CatalogConfig | None = None,
    ) -> None:
        """
        Args:
            registry: Tool registry; defaults to every built-in tool.
            identity: Server name/version reported by initialize.
        """
        self.registry = registry if registry is not None else create_registry()
        self.identity = identity if identity is not None else CatalogConfig()
        self._methods: dict[str, MethodHandler] = {
            "initialize": self._handle_initialize,
            "ping": self._handle_ping,
            "tools/list": self._handle_tools_list,
            "tools/call": self._handle_tools_call,
            "resources/list": self._handle_resources_list,
            "prompts/list": self._handle_prompts_list,
        }

    async def handle_message(
        self,
        data: Any,
        caller: CallerInfo | None = None,
    ) -> JSONRPCResponse | None:
        """
        Handle one decoded JSON-RPC message.

        Args:
            data: The decoded JSON value (normally a dict).
            caller: Where the message came from.

        Returns:
            The response, or None for notifications.
        """
        caller = caller or CallerInfo()

        try:
            request = validate_envelope(data)
        except JSONRPCError as e:
            request_id = None if e.code == INVALID_REQUEST else extract_request_id(data)
            logger.warning(
                "Rejected malformed message",
                extra={"code": e.code, "reason": e.message, "transport": caller.transport},
            )
            return format_error_response(request_id, e)

        if request.is_notification:
            logger.debug(
                "Ignoring notification",
                extra={"method": request.method, "transport": caller.transport},
            )
            return None

        try:
            handler = self._methods.get(request.method)
            if handler is None:
                raise MethodNotFoundError(
                    message="Method not found",
                    details={"method": request.method},
                )
            result = await handler(request, caller)
            return format_success_response(request.id, result)

        except ToolError as e:
            logger.info(
                "Request failed",
                extra={
                    "method": request.method,
                    "request_id": request.id,
                    "error_code": e.error_code,
                    "reason": e.message,
                },
            )
            return format_error_response(request.id, tool_error_to_jsonrpc_error(e))

        except Exception as e:
            logger.exception(
                "Unexpected error processing request",
                extra={"method": request.method, "request_id": request.id},
            )
            error = create_internal_error(
                message=f"Internal server error: {type(e).__name__}",
                details={"exception": str(e)},
            )
            return format_error_response(request.id, error)

    # =========================================================================
    # MCP Methods
    # =========================================================================

    async def _handle_initialize(
        self, request: JSONRPCRequest, caller: CallerInfo
    ) -> dict[str, Any]:
        client = request.params.get("clientInfo")
        logger.info(
            "Client initialized session",
            extra={"client": client, "transport": caller.transport},
        )
        return {
            "protocolVersion": self.identity.protocol_version,
            "capabilities": {"tools": {}},
            "serverInfo": {
                "name": self.identity.server_name,
                "version": self.identity.server_version,
            },
        }

    async def _handle_ping(
        self, request: JSONRPCRequest, caller: CallerInfo
    ) -> dict[str, Any]:
        return {}

    async def _handle_tools_list(
        self, request: JSONRPCRequest, caller: CallerInfo
    ) -> dict[str, Any]:
        return {"tools": self.registry.list_tools()}

    async def _handle_tools_call(
        self, request: JSONRPCRequest, caller: CallerInfo
    ) -> dict[str, Any]:
        name = request.params.get("name")
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError(
                "Tool name is required",
                details={"parameter": "name"},
            )

        arguments = request.params.get("arguments")
        if not isinstance(arguments, dict):
            arguments = {}

        ctx = ToolContext.for_tool(name, request.id, caller=caller)
        logger.debug("Calling tool", extra=ctx.to_dict())
        return await self.registry.invoke(name, ctx, arguments)

    async def _handle_resources_list(
        self, request: JSONRPCRequest, caller: CallerInfo
    ) -> dict[str, Any]:
        return {"resources": []}

    async def _handle_prompts_list(
        self, request: JSONRPCRequest, caller: CallerInfo
    ) -> dict[str, Any]:
        return {"prompts": []}
