"""
Tests for the context module.
"""

from __future__ import annotations

from datetime import UTC

from mcp_n8n.context import CallerInfo, ToolContext


class TestCallerInfo:
    """Tests for CallerInfo dataclass."""

    def test_defaults(self) -> None:
        caller = CallerInfo()
        assert caller.to_dict() == {
            "transport": "stdio",
            "authenticated": False,
            "ip_address": None,
        }


class TestToolContext:
    """Tests for ToolContext dataclass."""

    def test_for_tool(self) -> None:
        caller = CallerInfo(transport="http", authenticated=True, ip_address="10.0.0.1")
        ctx = ToolContext.for_tool("search_nodes", 42, caller=caller)

        assert ctx.tool_name == "search_nodes"
        assert ctx.request_id == 42
        assert ctx.caller is caller
        assert ctx.timestamp.tzinfo is UTC

    def test_for_tool_default_caller(self) -> None:
        ctx = ToolContext.for_tool("list_nodes", "abc")
        assert ctx.caller.transport == "stdio"

    def test_to_dict(self) -> None:
        ctx = ToolContext.for_tool("list_nodes", None)
        data = ctx.to_dict()

        assert data["tool_name"] == "list_nodes"
        assert data["request_id"] is None
        assert data["caller"]["transport"] == "stdio"
        assert data["timestamp"] == ctx.timestamp.isoformat()
