"""
Static n8n node tables.

These tables are built once at import time and never mutated. Lookup
functions return fresh copies, and unknown node names resolve to a generic
record instead of failing.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

NODE_NAMES: tuple[str, ...] = (
    "HTTP Request",
    "Function",
    "If",
    "Split In Batches",
    "Webhook",
    "Airtable",
    "Discord",
    "Slack",
    "Email",
    "Cron",
    "Manual Trigger",
    "Code",
    "Set",
    "Merge",
    "Filter",
    "Switch",
    "Wait",
    "Error Trigger",
    "Google Sheets",
    "Notion",
    "Zapier",
    "Pipedrive",
    "HubSpot",
    "Shopify",
    "Stripe",
    "GitHub",
    "GitLab",
    "Jira",
    "Trello",
    "Asana",
    "Monday.com",
    "ClickUp",
    "Linear",
    "Figma",
    "Canva",
)

NODE_CATEGORIES: tuple[str, ...] = (
    "Core",
    "Flow Control",
    "Communication",
    "Data",
    "Files",
    "CRM",
    "Marketing",
    "E-commerce",
    "Development",
    "Productivity",
    "Social Media",
    "Analytics",
    "Finance",
    "Design",
    "Project Management",
)

DEFAULT_NODE_NAME = "HTTP Request"


@dataclass(frozen=True)
class NodeInfo:
    """Short reference card for a node."""

    description: str
    category: str
    properties: tuple[str, ...]
    examples: tuple[str, ...]


@dataclass(frozen=True)
class NodeDocumentation:
    """Long-form documentation page for a node."""

    title: str
    description: str
    parameters: tuple[str, ...]
    examples: tuple[str, ...]


NODE_INFO: MappingProxyType[str, NodeInfo] = MappingProxyType(
    {
        "HTTP Request": NodeInfo(
            description="Make HTTP requests to external APIs and services",
            category="Core",
            properties=("URL", "Method", "Headers", "Body", "Authentication"),
            examples=("GET API data", "POST form data", "PUT update resource"),
        ),
        "Function": NodeInfo(
            description="Execute custom JavaScript code to transform data",
            category="Core",
            properties=("Code", "Input Data", "Output Format"),
            examples=("Data transformation", "Custom logic", "Data validation"),
        ),
        "If": NodeInfo(
            description="Conditionally route workflow execution based on conditions",
            category="Flow Control",
            properties=("Conditions", "True Path", "False Path"),
            examples=("Data filtering", "Error handling", "Branching logic"),
        ),
    }
)

GENERIC_NODE_INFO = NodeInfo(
    description="A powerful n8n node for workflow automation",
    category="General",
    properties=("Various configuration options",),
    examples=("Workflow automation", "Data processing", "Integration"),
)

NODE_DOCUMENTATION: MappingProxyType[str, NodeDocumentation] = MappingProxyType(
    {
        "HTTP Request": NodeDocumentation(
            title="HTTP Request Node Documentation",
            description=(
                "The HTTP Request node allows you to make HTTP requests to "
                "external APIs and services."
            ),
            parameters=(
                "URL: The endpoint URL to send the request to",
                "Method: HTTP method (GET, POST, PUT, DELETE, etc.)",
                "Headers: Custom headers to include in the request",
                "Body: Request body for POST/PUT requests",
                "Authentication: API keys, OAuth, or basic auth",
            ),
            examples=(
                "GET: Fetch data from a REST API",
                "POST: Send data to create a new resource",
                "PUT: Update an existing resource",
                "DELETE: Remove a resource",
            ),
        ),
    }
)


def filter_node_names(term: str) -> list[str]:
    """Return the node names containing ``term``, case-insensitively, in table order."""
    needle = term.lower()
    return [name for name in NODE_NAMES if needle in name.lower()]


def get_node_info(node_name: str) -> NodeInfo:
    """Look up a node's reference card, falling back to the generic one."""
    return NODE_INFO.get(node_name, GENERIC_NODE_INFO)


def get_node_documentation(node_name: str) -> NodeDocumentation:
    """Look up a node's documentation page, falling back to a generic page."""
    doc = NODE_DOCUMENTATION.get(node_name)
    if doc is not None:
        return doc
    return NodeDocumentation(
        title=f"{node_name} Node Documentation",
        description="Comprehensive documentation for this n8n node.",
        parameters=("Various configuration parameters available",),
        examples=("Multiple use cases and examples available",),
    )
