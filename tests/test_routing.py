"""
Tests for the routing module (ToolDefinition and ToolRegistry).
"""

from __future__ import annotations

from typing import Any

import pytest

from mcp_n8n.context import ToolContext
from mcp_n8n.errors import InternalError, InvalidArgumentError, MethodNotFoundError
from mcp_n8n.routing import ToolDefinition, ToolRegistry

# =============================================================================
# Helper Functions for Tests
# =============================================================================

ECHO = ToolDefinition(
    name="echo",
    description="Echo arguments",
    input_schema={"type": "object", "properties": {"text": {"type": "string"}}},
)
FAIL = ToolDefinition(name="fail", description="Always fails")
CRASH = ToolDefinition(name="crash", description="Always crashes")


async def echo_handler(ctx: ToolContext, arguments: dict[str, Any]) -> dict[str, Any]:
    """A handler that echoes its arguments."""
    return {"tool": ctx.tool_name, "echoed": arguments}


async def error_handler(_ctx: ToolContext, _arguments: dict[str, Any]) -> dict[str, Any]:
    """A handler that raises a ToolError."""
    raise InvalidArgumentError("Test error", details={"param": "test"})


async def exception_handler(
    _ctx: ToolContext, _arguments: dict[str, Any]
) -> dict[str, Any]:
    """A handler that raises a non-ToolError exception."""
    raise RuntimeError("Unexpected error")


@pytest.fixture
def registry() -> ToolRegistry:
    reg = ToolRegistry()
    reg.register(ECHO, echo_handler)
    reg.register(FAIL, error_handler)
    reg.register(CRASH, exception_handler)
    return reg


# =============================================================================
# Tests for ToolDefinition
# =============================================================================


class TestToolDefinition:
    """Tests for ToolDefinition."""

    def test_to_dict_uses_wire_names(self) -> None:
        """Test the wire form uses inputSchema."""
        assert ECHO.to_dict() == {
            "name": "echo",
            "description": "Echo arguments",
            "inputSchema": {
                "type": "object",
                "properties": {"text": {"type": "string"}},
            },
        }

    def test_default_schema(self) -> None:
        """Test the default schema is an empty object schema."""
        assert FAIL.input_schema == {"type": "object", "properties": {}}

    def test_to_dict_returns_copy(self) -> None:
        """Test mutating the wire form leaves the definition untouched."""
        wire = ECHO.to_dict()
        wire["inputSchema"]["properties"].clear()
        assert "text" in ECHO.input_schema["properties"]


# =============================================================================
# Tests for ToolRegistry
# =============================================================================


class TestToolRegistry:
    """Tests for ToolRegistry class."""

    def test_registry_creation(self) -> None:
        """Test creating an empty registry."""
        assert len(ToolRegistry()) == 0

    def test_register_and_lookup(self, registry: ToolRegistry) -> None:
        """Test registered tools can be found."""
        assert "echo" in registry
        assert registry.has_tool("fail")
        assert registry.get_handler("echo") is echo_handler
        assert registry.get_handler("nope") is None
        assert len(registry) == 3

    def test_duplicate_registration(self, registry: ToolRegistry) -> None:
        """Test registering the same name twice fails."""
        with pytest.raises(ValueError, match="already registered"):
            registry.register(ECHO, echo_handler)

    def test_list_tools_preserves_order(self, registry: ToolRegistry) -> None:
        """Test tools are listed in registration order."""
        assert [tool["name"] for tool in registry.list_tools()] == [
            "echo",
            "fail",
            "crash",
        ]
        assert registry.tool_names() == ["echo", "fail", "crash"]

    @pytest.mark.asyncio
    async def test_invoke(self, registry: ToolRegistry, ctx: ToolContext) -> None:
        """Test invoking a registered tool."""
        result = await registry.invoke("echo", ctx, {"text": "hi"})
        assert result == {"tool": "test_tool", "echoed": {"text": "hi"}}

    @pytest.mark.asyncio
    async def test_invoke_unknown_tool(
        self, registry: ToolRegistry, ctx: ToolContext
    ) -> None:
        """Test invoking an unknown tool raises MethodNotFoundError."""
        with pytest.raises(MethodNotFoundError, match="Tool not found: nope"):
            await registry.invoke("nope", ctx, {})

    @pytest.mark.asyncio
    async def test_invoke_tool_error_passes_through(
        self, registry: ToolRegistry, ctx: ToolContext
    ) -> None:
        """Test ToolErrors are re-raised unchanged."""
        with pytest.raises(InvalidArgumentError, match="Test error"):
            await registry.invoke("fail", ctx, {})

    @pytest.mark.asyncio
    async def test_invoke_wraps_unexpected_exception(
        self, registry: ToolRegistry, ctx: ToolContext
    ) -> None:
        """Test other exceptions become InternalError."""
        with pytest.raises(InternalError) as exc_info:
            await registry.invoke("crash", ctx, {})

        assert exc_info.value.details["exception_type"] == "RuntimeError"
        assert isinstance(exc_info.value.__cause__, RuntimeError)
