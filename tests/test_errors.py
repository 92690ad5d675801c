"""
Tests for the errors module.
"""

from __future__ import annotations

import pytest

from mcp_n8n.errors import (
    InternalError,
    InvalidArgumentError,
    MethodNotFoundError,
    ToolError,
    UnauthenticatedError,
)


class TestToolError:
    """Tests for ToolError base class."""

    def test_init_with_all_args(self) -> None:
        """Test ToolError initialization with all arguments."""
        error = ToolError(
            error_code="test_error",
            message="Test error message",
            details={"key": "value"},
        )

        assert error.error_code == "test_error"
        assert error.message == "Test error message"
        assert error.details == {"key": "value"}
        assert str(error) == "Test error message"

    def test_details_default_to_empty(self) -> None:
        """Test that details default to an empty dict."""
        assert ToolError(error_code="x", message="y").details == {}

    def test_repr(self) -> None:
        """Test the repr names the subclass."""
        error = InvalidArgumentError("bad")
        assert repr(error).startswith("InvalidArgumentError(")

    def test_to_dict(self) -> None:
        """Test serialization."""
        error = MethodNotFoundError("Tool not found: x", details={"tool": "x"})
        assert error.to_dict() == {
            "error_code": "method_not_found",
            "message": "Tool not found: x",
            "details": {"tool": "x"},
        }


@pytest.mark.parametrize(
    ("error_class", "error_code"),
    [
        (InvalidArgumentError, "invalid_argument"),
        (MethodNotFoundError, "method_not_found"),
        (UnauthenticatedError, "unauthenticated"),
        (InternalError, "internal"),
    ],
)
def test_subclass_error_codes(error_class: type[ToolError], error_code: str) -> None:
    """Test each subclass carries its error code and is a ToolError."""
    error = error_class("message")
    assert isinstance(error, ToolError)
    assert error.error_code == error_code
