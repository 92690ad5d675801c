"""
Node tools for the n8n MCP Server.

This module implements the node lookup tools:
- list_nodes: List node names, optionally filtered by a category keyword
- get_node_info: Reference card for one node
- search_nodes: Keyword search over node names
- get_node_documentation: Documentation page for one node
- list_node_categories: List all node categories

All answers come from mcp_n8n.catalog.nodes. Unknown node names get a
generic answer rather than an error.
"""

from __future__ import annotations

from typing import Any

from mcp_n8n.catalog import nodes as catalog
from mcp_n8n.context import ToolContext
from mcp_n8n.logging import get_logger
from mcp_n8n.routing import ToolDefinition, ToolRegistry
from mcp_n8n.tools.results import (
    bullet_list,
    lookup_argument,
    string_argument,
    text_result,
)

logger = get_logger(__name__)

# =============================================================================
# Tool Descriptors
# =============================================================================

LIST_NODES = ToolDefinition(
    name="list_nodes",
    description="List available n8n nodes",
    input_schema={
        "type": "object",
        "properties": {
            "category": {
                "type": "string",
                "description": "Filter by node category",
            }
        },
    },
)

GET_NODE_INFO = ToolDefinition(
    name="get_node_info",
    description="Get detailed information about a specific n8n node",
    input_schema={
        "type": "object",
        "properties": {
            "nodeName": {
                "type": "string",
                "description": "Name of the node to get information for",
            }
        },
        "required": ["nodeName"],
    },
)

SEARCH_NODES = ToolDefinition(
    name="search_nodes",
    description="Search for n8n nodes by keyword",
    input_schema={
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": "Search query",
            }
        },
        "required": ["query"],
    },
)

GET_NODE_DOCUMENTATION = ToolDefinition(
    name="get_node_documentation",
    description="Get detailed documentation for a specific n8n node",
    input_schema={
        "type": "object",
        "properties": {
            "nodeName": {
                "type": "string",
                "description": "Name of the node to get documentation for",
            }
        },
        "required": ["nodeName"],
    },
)

LIST_NODE_CATEGORIES = ToolDefinition(
    name="list_node_categories",
    description="List all available n8n node categories",
    input_schema={"type": "object", "properties": {}},
)


# =============================================================================
# Handlers
# =============================================================================


async def handle_list_nodes(
    ctx: ToolContext, arguments: dict[str, Any]
) -> dict[str, Any]:
    """
    Handle the list_nodes tool.

    The category is matched as a case-insensitive substring of the node
    name, so "slack" selects "Slack".
    """
    category = string_argument(arguments, "category")
    matches = catalog.filter_node_names(category) if category else list(catalog.NODE_NAMES)

    logger.debug(
        "Listing nodes",
        extra={"request_id": ctx.request_id, "category": category, "matches": len(matches)},
    )

    scope = f' in category "{category}"' if category else ""
    return text_result(
        f"Available n8n nodes{scope}:\n\n"
        f"{', '.join(matches)}\n\n"
        f"Total: {len(matches)} nodes"
    )


async def handle_get_node_info(
    ctx: ToolContext, arguments: dict[str, Any]
) -> dict[str, Any]:
    """Handle the get_node_info tool."""
    node_name = lookup_argument(arguments, "nodeName", catalog.DEFAULT_NODE_NAME)
    info = catalog.get_node_info(node_name)

    return text_result(
        f"**{node_name} Node**\n\n"
        f"**Description:** {info.description}\n"
        f"**Category:** {info.category}\n"
        f"**Key Properties:** {', '.join(info.properties)}\n"
        f"**Common Use Cases:** {', '.join(info.examples)}"
    )


async def handle_search_nodes(
    ctx: ToolContext, arguments: dict[str, Any]
) -> dict[str, Any]:
    """Handle the search_nodes tool. An empty query matches every node."""
    query = string_argument(arguments, "query")
    matches = catalog.filter_node_names(query)

    found = ", ".join(matches) if matches else "No nodes found"
    return text_result(
        f'Search results for "{query}":\n\n'
        f"{found}\n\n"
        f"Found {len(matches)} matching nodes."
    )


async def handle_get_node_documentation(
    ctx: ToolContext, arguments: dict[str, Any]
) -> dict[str, Any]:
    """Handle the get_node_documentation tool."""
    node_name = lookup_argument(arguments, "nodeName", catalog.DEFAULT_NODE_NAME)
    doc = catalog.get_node_documentation(node_name)

    return text_result(
        f"# {doc.title}\n\n"
        f"{doc.description}\n\n"
        f"## Parameters\n{bullet_list(doc.parameters)}\n\n"
        f"## Examples\n{bullet_list(doc.examples)}"
    )


async def handle_list_node_categories(
    ctx: ToolContext, arguments: dict[str, Any]
) -> dict[str, Any]:
    """Handle the list_node_categories tool."""
    categories = catalog.NODE_CATEGORIES
    return text_result(
        "Available n8n node categories:\n\n"
        f"{', '.join(categories)}\n\n"
        f"Total: {len(categories)} categories"
    )


# =============================================================================
# Handler Registration
# =============================================================================


def register_node_tools(registry: ToolRegistry) -> None:
    """Register the node tools in the given registry."""
    registry.register(LIST_NODES, handle_list_nodes)
    registry.register(GET_NODE_INFO, handle_get_node_info)
    registry.register(SEARCH_NODES, handle_search_nodes)
    registry.register(GET_NODE_DOCUMENTATION, handle_get_node_documentation)
    registry.register(LIST_NODE_CATEGORIES, handle_list_node_categories)
