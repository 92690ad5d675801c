"""
HTTP transport for the n8n MCP Server.

A FastAPI application serving the same dispatcher as the stdio transport:
- POST / and POST /mcp: one JSON-RPC message per request body (bearer auth)
- GET /health: liveness document (no auth)
- GET /: server information (no auth)
- OPTIONS *: CORS preflight
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from mcp_n8n.config import AppConfig
from mcp_n8n.context import CallerInfo
from mcp_n8n.dispatcher import MCPDispatcher
from mcp_n8n.errors import UnauthenticatedError
from mcp_n8n.logging import get_logger
from mcp_n8n.protocol import (
    INTERNAL_ERROR,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    JSONRPCError,
    JSONRPCResponse,
    decode_message,
    extract_request_id,
    format_error_response,
    tool_error_to_jsonrpc_error,
)
from mcp_n8n.security import BearerTokenAuthenticator

logger = get_logger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

# JSON-RPC error codes answered with a non-200 HTTP status
_ERROR_STATUS = {
    PARSE_ERROR: 400,
    INVALID_REQUEST: 400,
    METHOD_NOT_FOUND: 400,
    INTERNAL_ERROR: 500,
}


def _json_rpc_response(response: JSONRPCResponse, status_code: int | None = None) -> JSONResponse:
    if status_code is None:
        status_code = 200
        if response.error is not None:
            status_code = _ERROR_STATUS.get(response.error.code, 200)
    return JSONResponse(response.to_dict(), status_code=status_code)


def create_app(
    config: AppConfig | None = None,
    dispatcher: MCPDispatcher | None = None,
) -> FastAPI:
    """
    Create the FastAPI application for the HTTP transport.

    Args:
        config: Application configuration (token, server identity).
        dispatcher: Optional dispatcher; defaults to one serving every tool.
    """
    config = config if config is not None else AppConfig()
    dispatcher = (
        dispatcher if dispatcher is not None else MCPDispatcher(identity=config.catalog)
    )
    authenticator = BearerTokenAuthenticator.from_config(config.security)
    identity = config.catalog

    if not authenticator.configured:
        logger.warning("No auth token configured; every MCP request will be rejected")

    app = FastAPI(
        title="n8n MCP Server",
        description="Canned n8n node and workflow tools over MCP",
        version=identity.server_version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.dispatcher = dispatcher

    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next: Any) -> Response:
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    @app.options("/{path:path}")
    async def preflight(path: str) -> Response:
        return Response(status_code=200)

    @app.get("/health")
    async def health() -> dict[str, Any]:
        return {
            "status": "ok",
            "message": "n8n MCP server is running",
            "deployment": "http",
            "timestamp": datetime.now(UTC).isoformat(),
            "version": identity.server_version,
            "authentication": "required_for_mcp",
        }

    @app.get("/")
    async def server_info() -> dict[str, Any]:
        return {
            "message": "n8n MCP Server",
            "status": "running",
            "deployment": "http",
            "version": identity.server_version,
            "authentication": "required_for_mcp",
            "endpoints": {
                "health": "/health (GET)",
                "mcp": "/ (POST with Authorization: Bearer <token>)",
            },
        }

    @app.post("/")
    @app.post("/mcp")
    async def mcp(request: Request) -> Response:
        body = await request.body()

        data: Any = None
        parse_error: JSONRPCError | None = None
        try:
            data = decode_message(body)
        except JSONRPCError as e:
            parse_error = e

        try:
            authenticator.authenticate(request.headers.get("authorization"))
        except UnauthenticatedError as e:
            error_response = format_error_response(
                extract_request_id(data), tool_error_to_jsonrpc_error(e)
            )
            return _json_rpc_response(error_response, status_code=401)

        if parse_error is not None:
            logger.warning("Error parsing request body", extra={"reason": parse_error.message})
            return _json_rpc_response(format_error_response(None, parse_error))

        caller = CallerInfo(
            transport="http",
            authenticated=True,
            ip_address=request.client.host if request.client else None,
        )
        response = await dispatcher.handle_message(data, caller)
        if response is None:
            return Response(status_code=202)
        return _json_rpc_response(response)

    return app


def run_server(config: AppConfig) -> None:
    """Serve the HTTP transport with uvicorn until interrupted."""
    import uvicorn

    app = create_app(config)
    logger.info("HTTP MCP Server starting", extra={"listen": config.server.listen})
    uvicorn.run(
        app,
        host=config.server.host,
        port=config.server.port,
        log_level=config.logging.level,
    )
