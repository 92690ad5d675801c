"""
Shallow structure checks for n8n workflow documents.

Every check is independent and only looks at the presence and JSON type of
a field. Nothing here checks that connections point at existing nodes or
that the graph is acyclic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

STATUS_VALID = "VALID"
STATUS_INVALID = "INVALID"


@dataclass
class ValidationReport:
    """Outcome of validate_workflow_structure."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    node_count: int = 0
    connection_count: int = 0

    @property
    def status(self) -> str:
        return STATUS_VALID if not self.errors else STATUS_INVALID

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def summary(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "nodes": self.node_count,
            "connections": self.connection_count,
        }


def _is_position(value: Any) -> bool:
    return isinstance(value, list) and len(value) == 2


def _check_node(index: int, node: Any, report: ValidationReport) -> None:
    if not isinstance(node, dict):
        report.errors.append(f"Node {index}: Invalid node (should be an object)")
        return

    if not node.get("id"):
        report.errors.append(f"Node {index}: Missing ID")
    if not node.get("name"):
        report.errors.append(f"Node {index}: Missing name")
    if not node.get("type"):
        report.errors.append(f"Node {index}: Missing type")
    if not _is_position(node.get("position")):
        report.errors.append(f"Node {index}: Invalid position (should be [x, y])")
    if not node.get("typeVersion"):
        report.warnings.append(f"Node {index}: Missing typeVersion (recommended)")


def validate_workflow_structure(workflow: dict[str, Any]) -> ValidationReport:
    """
    Run the presence checks on a workflow document.

    Args:
        workflow: The workflow object supplied by the client.

    Returns:
        A ValidationReport; status is VALID when no errors were recorded.
    """
    report = ValidationReport()

    if not workflow.get("name"):
        report.errors.append("Missing workflow name")

    nodes = workflow.get("nodes")
    if not isinstance(nodes, list):
        report.errors.append("Missing or invalid nodes array")
    else:
        report.node_count = len(nodes)
        for index, node in enumerate(nodes):
            _check_node(index, node, report)

    connections = workflow.get("connections")
    if not isinstance(connections, dict):
        report.errors.append("Missing or invalid connections object")
    else:
        report.connection_count = len(connections)
        for source, outputs in connections.items():
            if not isinstance(outputs, dict):
                report.errors.append(f"Invalid connections for node: {source}")

    return report
