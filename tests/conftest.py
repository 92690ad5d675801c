"""
Pytest configuration for the n8n MCP Server tests.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from mcp_n8n.context import ToolContext
from mcp_n8n.dispatcher import MCPDispatcher

pytest_plugins = ["pytest_asyncio"]


@pytest.fixture
def dispatcher() -> MCPDispatcher:
    """A dispatcher serving every built-in tool."""
    return MCPDispatcher()


@pytest.fixture
def ctx() -> ToolContext:
    """A tool context for calling handlers directly."""
    return ToolContext.for_tool("test_tool", "req-1")


@pytest.fixture(autouse=True)
def _cleanup_loggers() -> Iterator[None]:
    """Drop handlers installed by setup_logging between tests."""
    yield
    logger = logging.getLogger("mcp_n8n")
    logger.handlers.clear()
    logger.propagate = True
