"""
Static n8n catalog tables.

Modules:
- nodes: node names, categories, reference cards and documentation pages
- workflows: test workflows and importable workflow templates
"""

from mcp_n8n.catalog.nodes import NODE_CATEGORIES, NODE_NAMES
from mcp_n8n.catalog.workflows import TEMPLATE_NAMES, WORKFLOW_TYPES

__all__ = [
    "NODE_NAMES",
    "NODE_CATEGORIES",
    "WORKFLOW_TYPES",
    "TEMPLATE_NAMES",
]
