"""
MCP tools package for the n8n MCP Server.

Modules:
- nodes: node listing, lookup, search and documentation
- workflows: test workflows, validation and templates
"""

from mcp_n8n.routing import ToolRegistry
from mcp_n8n.tools.nodes import (
    handle_get_node_documentation,
    handle_get_node_info,
    handle_list_node_categories,
    handle_list_nodes,
    handle_search_nodes,
    register_node_tools,
)
from mcp_n8n.tools.workflows import (
    handle_create_test_workflow,
    handle_get_workflow_template,
    handle_validate_workflow,
    register_workflow_tools,
)


def create_registry() -> ToolRegistry:
    """Build a registry holding every tool, in tools/list order."""
    registry = ToolRegistry()
    register_node_tools(registry)
    register_workflow_tools(registry)
    return registry


__all__ = [
    "create_registry",
    # Node tools
    "handle_list_nodes",
    "handle_get_node_info",
    "handle_search_nodes",
    "handle_get_node_documentation",
    "handle_list_node_categories",
    # Workflow tools
    "handle_create_test_workflow",
    "handle_validate_workflow",
    "handle_get_workflow_template",
]
