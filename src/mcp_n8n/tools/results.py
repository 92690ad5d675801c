"""
Helpers shared by the tool handlers: argument access and result envelopes.
"""

from __future__ import annotations

import json
from typing import Any

from mcp_n8n.errors import InvalidArgumentError


def text_result(text: str) -> dict[str, Any]:
    """Wrap a text blob in the MCP tools/call result envelope."""
    return {"content": [{"type": "text", "text": text}]}


def string_argument(
    arguments: dict[str, Any],
    name: str,
    default: str = "",
) -> str:
    """
    Read an optional string argument.

    Missing, null and empty values fall back to ``default``.

    Raises:
        InvalidArgumentError: If the value is present but not a string.
    """
    value = arguments.get(name)
    if value is None or value == "":
        return default
    if not isinstance(value, str):
        raise InvalidArgumentError(
            f"Argument '{name}' must be a string",
            details={"parameter": name, "type": type(value).__name__},
        )
    return value


def pretty_json(value: Any) -> str:
    """Render a JSON document the way n8n's editor exports it (2-space indent)."""
    return json.dumps(value, indent=2, ensure_ascii=False)


def bullet_list(items: list[str] | tuple[str, ...]) -> str:
    return "\n".join(f"- {item}" for item in items)


def lookup_argument(
    arguments: dict[str, Any],
    name: str,
    default: str,
) -> str:
    """
    Read a lookup key that must never fail the call.

    Missing, null, empty, false and zero values fall back to ``default``;
    any other non-string value is rendered with ``str()``.
    """
    value = arguments.get(name)
    if value is None or value == "" or value is False or value == 0:
        return default
    if not isinstance(value, str):
        return str(value)
    return value
