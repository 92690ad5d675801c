"""
Workflow tools for the n8n MCP Server.

This module implements the workflow tools:
- create_test_workflow: Emit a ready-made test workflow by type
- validate_workflow: Shallow structure checks on a client workflow
- get_workflow_template: Emit a pre-built workflow template by name

Unknown workflow types and template names are invalid params (-32602).
"""

from __future__ import annotations

from typing import Any

from mcp_n8n.catalog import workflows as catalog
from mcp_n8n.context import ToolContext
from mcp_n8n.errors import InvalidArgumentError
from mcp_n8n.logging import get_logger
from mcp_n8n.routing import ToolDefinition, ToolRegistry
from mcp_n8n.tools.results import bullet_list, pretty_json, string_argument, text_result
from mcp_n8n.validation import validate_workflow_structure

logger = get_logger(__name__)

# =============================================================================
# Tool Descriptors
# =============================================================================

CREATE_TEST_WORKFLOW = ToolDefinition(
    name="create_test_workflow",
    description="Create a test workflow for validation and testing",
    input_schema={
        "type": "object",
        "properties": {
            "workflowType": {
                "type": "string",
                "description": "Type of test workflow to create",
                "enum": list(catalog.WORKFLOW_TYPES),
            },
            "customName": {
                "type": "string",
                "description": "Custom name for the workflow",
            },
        },
        "required": ["workflowType"],
    },
)

VALIDATE_WORKFLOW = ToolDefinition(
    name="validate_workflow",
    description="Validate a workflow structure and configuration",
    input_schema={
        "type": "object",
        "properties": {
            "workflow": {
                "type": "object",
                "description": "Workflow object to validate",
            }
        },
        "required": ["workflow"],
    },
)

GET_WORKFLOW_TEMPLATE = ToolDefinition(
    name="get_workflow_template",
    description="Get a pre-built workflow template",
    input_schema={
        "type": "object",
        "properties": {
            "templateName": {
                "type": "string",
                "description": "Name of the template to get",
                "enum": list(catalog.TEMPLATE_NAMES),
            }
        },
        "required": ["templateName"],
    },
)

TESTING_STEPS = (
    "1. Copy the JSON above\n"
    "2. Use validate_workflow to check for issues\n"
    "3. Import into n8n instance\n"
    "4. Test execution"
)

TEMPLATE_USAGE_STEPS = (
    "1. Copy the JSON above\n"
    "2. Import into n8n\n"
    "3. Configure credentials\n"
    "4. Test execution"
)

VALID_RECOMMENDATIONS = (
    "✅ Workflow structure is valid",
    "🧪 Ready for testing in n8n",
    "📝 Consider adding error handling nodes",
)

INVALID_RECOMMENDATIONS = (
    "❌ Fix errors before testing",
    "🔧 Review node configurations",
    "📚 Check n8n documentation for node types",
)


# =============================================================================
# Handlers
# =============================================================================


async def handle_create_test_workflow(
    ctx: ToolContext, arguments: dict[str, Any]
) -> dict[str, Any]:
    """
    Handle the create_test_workflow tool.

    Raises:
        InvalidArgumentError: If the workflow type is unknown.
    """
    workflow_type = string_argument(
        arguments, "workflowType", catalog.DEFAULT_WORKFLOW_TYPE
    )
    custom_name = string_argument(
        arguments, "customName", f"Test Workflow - {workflow_type}"
    )

    workflow = catalog.build_test_workflow(workflow_type, custom_name)
    if workflow is None:
        raise InvalidArgumentError(
            f"Unknown workflow type: {workflow_type}",
            details={
                "workflowType": workflow_type,
                "available": list(catalog.WORKFLOW_TYPES),
            },
        )

    logger.info(
        "Created test workflow",
        extra={"request_id": ctx.request_id, "workflow_type": workflow_type},
    )

    return text_result(
        f'✅ Created test workflow: "{workflow["name"]}"\n\n'
        f"**Workflow Type:** {workflow_type}\n"
        f"**Nodes:** {len(workflow['nodes'])}\n"
        f"**Connections:** {len(workflow['connections'])}\n\n"
        f"**Workflow JSON:**\n```json\n{pretty_json(workflow)}\n```\n\n"
        f"**Testing Instructions:**\n{TESTING_STEPS}"
    )


async def handle_validate_workflow(
    ctx: ToolContext, arguments: dict[str, Any]
) -> dict[str, Any]:
    """
    Handle the validate_workflow tool.

    Structure problems are reported in the result text, not as errors.

    Raises:
        InvalidArgumentError: If no workflow object was supplied.
    """
    workflow = arguments.get("workflow")
    if not isinstance(workflow, dict):
        raise InvalidArgumentError(
            "Workflow object is required",
            details={"parameter": "workflow"},
        )

    report = validate_workflow_structure(workflow)

    logger.info(
        "Validated workflow",
        extra={
            "request_id": ctx.request_id,
            "status": report.status,
            "errors": len(report.errors),
            "warnings": len(report.warnings),
        },
    )

    sections = [
        "## Workflow Validation Results",
        f"**Status:** {report.status}\n**Summary:** {pretty_json(report.summary())}",
    ]
    if report.errors:
        sections.append(f"**Errors:**\n{bullet_list(report.errors)}")
    if report.warnings:
        sections.append(f"**Warnings:**\n{bullet_list(report.warnings)}")
    recommendations = (
        VALID_RECOMMENDATIONS if report.is_valid else INVALID_RECOMMENDATIONS
    )
    sections.append(f"**Recommendations:**\n{bullet_list(recommendations)}")

    return text_result("\n\n".join(sections))


async def handle_get_workflow_template(
    ctx: ToolContext, arguments: dict[str, Any]
) -> dict[str, Any]:
    """
    Handle the get_workflow_template tool.

    Raises:
        InvalidArgumentError: If the template name is unknown.
    """
    template_name = string_argument(
        arguments, "templateName", catalog.DEFAULT_TEMPLATE_NAME
    )
    template = catalog.get_template(template_name)
    if template is None:
        raise InvalidArgumentError(
            f"Unknown template: {template_name}",
            details={
                "templateName": template_name,
                "available": list(catalog.TEMPLATE_NAMES),
            },
        )

    return text_result(
        f"## Workflow Template: {template.name}\n\n"
        f"**Description:** {template.description}\n"
        f"**Category:** {template.category}\n"
        f"**Difficulty:** {template.difficulty}\n"
        f"**Nodes:** {template.node_count}\n\n"
        f"**Workflow JSON:**\n```json\n{pretty_json(template.workflow)}\n```\n\n"
        f"**Usage:**\n{TEMPLATE_USAGE_STEPS}"
    )


# =============================================================================
# Handler Registration
# =============================================================================


def register_workflow_tools(registry: ToolRegistry) -> None:
    """Register the workflow tools in the given registry."""
    registry.register(CREATE_TEST_WORKFLOW, handle_create_test_workflow)
    registry.register(VALIDATE_WORKFLOW, handle_validate_workflow)
    registry.register(GET_WORKFLOW_TEMPLATE, handle_get_workflow_template)
