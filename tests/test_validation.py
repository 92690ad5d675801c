"""
Tests for workflow structure validation.
"""

from __future__ import annotations

from typing import Any

import pytest

from mcp_n8n.validation import STATUS_INVALID, STATUS_VALID, validate_workflow_structure


def _good_node(**overrides: Any) -> dict[str, Any]:
    node = {
        "id": "n1",
        "name": "Webhook",
        "type": "n8n-nodes-base.webhook",
        "typeVersion": 1,
        "position": [250, 300],
        "parameters": {},
    }
    node.update(overrides)
    return node


class TestValidateWorkflowStructure:
    """Tests for validate_workflow_structure."""

    def test_minimal_workflow_is_valid(self) -> None:
        """Test an empty but well-formed workflow passes."""
        report = validate_workflow_structure({"name": "x", "nodes": [], "connections": {}})

        assert report.status == STATUS_VALID
        assert report.errors == []
        assert report.warnings == []
        assert report.summary() == {
            "status": "VALID",
            "errors": 0,
            "warnings": 0,
            "nodes": 0,
            "connections": 0,
        }

    def test_missing_nodes_is_invalid(self) -> None:
        report = validate_workflow_structure({"name": "x", "connections": {}})

        assert report.status == STATUS_INVALID
        assert "Missing or invalid nodes array" in report.errors

    def test_empty_object_reports_every_top_level_problem(self) -> None:
        report = validate_workflow_structure({})

        assert report.errors == [
            "Missing workflow name",
            "Missing or invalid nodes array",
            "Missing or invalid connections object",
        ]

    @pytest.mark.parametrize("nodes", [{"a": 1}, "nodes", 3])
    def test_non_list_nodes(self, nodes: Any) -> None:
        report = validate_workflow_structure(
            {"name": "x", "nodes": nodes, "connections": {}}
        )
        assert report.errors == ["Missing or invalid nodes array"]

    def test_connections_must_be_object(self) -> None:
        report = validate_workflow_structure(
            {"name": "x", "nodes": [], "connections": []}
        )
        assert report.errors == ["Missing or invalid connections object"]

    def test_node_field_errors(self) -> None:
        """Test each missing node field is reported with the node index."""
        report = validate_workflow_structure(
            {
                "name": "x",
                "nodes": [_good_node(), {"parameters": {}}],
                "connections": {},
            }
        )

        assert report.errors == [
            "Node 1: Missing ID",
            "Node 1: Missing name",
            "Node 1: Missing type",
            "Node 1: Invalid position (should be [x, y])",
        ]
        assert report.warnings == ["Node 1: Missing typeVersion (recommended)"]
        assert report.node_count == 2

    @pytest.mark.parametrize("position", [[1], [1, 2, 3], "1,2", None])
    def test_bad_positions(self, position: Any) -> None:
        report = validate_workflow_structure(
            {"name": "x", "nodes": [_good_node(position=position)], "connections": {}}
        )
        assert report.errors == ["Node 0: Invalid position (should be [x, y])"]

    def test_missing_type_version_is_only_a_warning(self) -> None:
        node = _good_node()
        del node["typeVersion"]
        report = validate_workflow_structure(
            {"name": "x", "nodes": [node], "connections": {}}
        )

        assert report.is_valid
        assert report.warnings == ["Node 0: Missing typeVersion (recommended)"]

    def test_non_object_node(self) -> None:
        report = validate_workflow_structure(
            {"name": "x", "nodes": ["Webhook"], "connections": {}}
        )
        assert report.errors == ["Node 0: Invalid node (should be an object)"]

    def test_invalid_connection_entry(self) -> None:
        report = validate_workflow_structure(
            {
                "name": "x",
                "nodes": [_good_node()],
                "connections": {"Webhook": "Slack"},
            }
        )

        assert report.errors == ["Invalid connections for node: Webhook"]
        assert report.connection_count == 1

    def test_dangling_connections_are_not_checked(self) -> None:
        """Test connections to unknown nodes are accepted."""
        report = validate_workflow_structure(
            {
                "name": "x",
                "nodes": [_good_node()],
                "connections": {
                    "Ghost": {"main": [[{"node": "Nobody", "type": "main", "index": 0}]]}
                },
            }
        )
        assert report.is_valid
