"""
Tests for the HTTP transport.

This test module validates:
- /health and GET / need no credentials
- MCP requests without a valid bearer token get 401 / -32001
- Authenticated requests are dispatched on / and /mcp
- CORS headers and preflight handling
- Status codes for notifications, parse errors, JSON-RPC errors and crashes
"""

from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from mcp_n8n.config import AppConfig, SecurityConfig
from mcp_n8n.context import ToolContext
from mcp_n8n.dispatcher import MCPDispatcher
from mcp_n8n.http_app import CORS_HEADERS, create_app
from mcp_n8n.routing import ToolDefinition, ToolRegistry

TOKEN = "s3cret-token"
AUTH = {"Authorization": f"Bearer {TOKEN}"}

UNAUTHORIZED_ERROR = {
    "code": -32001,
    "message": "Unauthorized - Valid Bearer token required",
}


@pytest.fixture
def client() -> TestClient:
    config = AppConfig(security=SecurityConfig(auth_token=TOKEN))
    return TestClient(create_app(config))


def _rpc(method: str, request_id: Any = 1, **params: Any) -> dict[str, Any]:
    message: dict[str, Any] = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params:
        message["params"] = params
    return message


# =============================================================================
# Unauthenticated Endpoints
# =============================================================================


class TestPublicEndpoints:
    """Tests for endpoints that need no token."""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["message"] == "n8n MCP server is running"
        assert body["authentication"] == "required_for_mcp"
        assert "timestamp" in body

    def test_server_info(self, client: TestClient) -> None:
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["endpoints"]["health"] == "/health (GET)"

    @pytest.mark.parametrize("path", ["/", "/mcp", "/health"])
    def test_preflight(self, client: TestClient, path: str) -> None:
        response = client.options(path)

        assert response.status_code == 200
        for header, value in CORS_HEADERS.items():
            assert response.headers[header] == value

    @pytest.mark.parametrize(
        ("method", "path", "status"),
        [("GET", "/health", 200), ("GET", "/", 200), ("POST", "/mcp", 401)],
    )
    def test_cors_headers_without_origin(
        self, client: TestClient, method: str, path: str, status: int
    ) -> None:
        """Test CORS headers are sent even when the request has no Origin header."""
        response = client.request(method, path)

        assert "origin" not in response.request.headers
        assert response.status_code == status
        for header, value in CORS_HEADERS.items():
            assert response.headers[header] == value


# =============================================================================
# Authentication
# =============================================================================


class TestAuthentication:
    """Tests for bearer-token checks on MCP requests."""

    @pytest.mark.parametrize(
        "headers",
        [
            {},
            {"Authorization": "Bearer wrong"},
            {"Authorization": f"Basic {TOKEN}"},
            {"Authorization": "Bearer "},
            {"Authorization": TOKEN},
        ],
    )
    def test_rejected(self, client: TestClient, headers: dict[str, str]) -> None:
        response = client.post("/", json=_rpc("tools/list", 5), headers=headers)

        assert response.status_code == 401
        assert response.json() == {"jsonrpc": "2.0", "id": 5, "error": UNAUTHORIZED_ERROR}
        assert response.headers["Access-Control-Allow-Origin"] == "*"

    def test_rejected_before_parsing(self, client: TestClient) -> None:
        """Test unauthenticated garbage gets 401, not a parse error."""
        response = client.post("/mcp", content=b"{garbage")

        assert response.status_code == 401
        assert response.json()["id"] is None
        assert response.json()["error"] == UNAUTHORIZED_ERROR

    def test_no_token_configured_rejects_everything(self) -> None:
        client = TestClient(create_app(AppConfig()))

        response = client.post("/", json=_rpc("ping"), headers={"Authorization": "Bearer "})
        assert response.status_code == 401

        # Public endpoints still work
        assert client.get("/health").status_code == 200


# =============================================================================
# Authenticated MCP Requests
# =============================================================================


class TestMCPRequests:
    """Tests for dispatched MCP requests."""

    @pytest.mark.parametrize("path", ["/", "/mcp"])
    def test_tools_list(self, client: TestClient, path: str) -> None:
        response = client.post(path, json=_rpc("tools/list"), headers=AUTH)

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == 1
        assert len(body["result"]["tools"]) == 8
        assert response.headers["Access-Control-Allow-Origin"] == "*"

    def test_tools_call(self, client: TestClient) -> None:
        response = client.post(
            "/",
            json=_rpc(
                "tools/call",
                "call-1",
                name="get_workflow_template",
                arguments={"templateName": "ai_chatbot"},
            ),
            headers=AUTH,
        )

        assert response.status_code == 200
        text = response.json()["result"]["content"][0]["text"]
        assert text.startswith("## Workflow Template: AI Chatbot")

    def test_notification(self, client: TestClient) -> None:
        response = client.post(
            "/",
            json={"jsonrpc": "2.0", "method": "notifications/initialized"},
            headers=AUTH,
        )

        assert response.status_code == 202
        assert response.content == b""

    def test_parse_error(self, client: TestClient) -> None:
        response = client.post("/", content=b"{not json", headers=AUTH)

        assert response.status_code == 400
        body = response.json()
        assert body["id"] is None
        assert body["error"]["code"] == -32700

    def test_invalid_request(self, client: TestClient) -> None:
        response = client.post("/", json={"id": 1, "method": "ping"}, headers=AUTH)

        assert response.status_code == 400
        assert response.json() == {
            "jsonrpc": "2.0",
            "id": None,
            "error": {"code": -32600, "message": "Invalid Request"},
        }

    def test_unknown_method(self, client: TestClient) -> None:
        response = client.post("/", json=_rpc("nope/nope"), headers=AUTH)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == -32601

    def test_invalid_params_is_200(self, client: TestClient) -> None:
        """Test tool argument errors are answered with HTTP 200."""
        response = client.post(
            "/",
            json=_rpc(
                "tools/call",
                name="create_test_workflow",
                arguments={"workflowType": "unknown_type"},
            ),
            headers=AUTH,
        )

        assert response.status_code == 200
        assert response.json()["error"]["code"] == -32602

    def test_handler_crash_is_500(self) -> None:
        """Test an unexpected handler failure is answered with HTTP 500."""

        async def crash(_ctx: ToolContext, _arguments: dict[str, Any]) -> dict[str, Any]:
            raise ZeroDivisionError("division by zero")

        registry = ToolRegistry()
        registry.register(ToolDefinition("crash", "Crashes"), crash)
        config = AppConfig(security=SecurityConfig(auth_token=TOKEN))
        client = TestClient(create_app(config, dispatcher=MCPDispatcher(registry=registry)))

        response = client.post("/mcp", json=_rpc("tools/call", 3, name="crash"), headers=AUTH)

        assert response.status_code == 500
        body = response.json()
        assert body["id"] == 3
        assert body["error"]["code"] == -32603
        assert response.headers["Access-Control-Allow-Origin"] == "*"
