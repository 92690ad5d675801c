"""
Command-line entry point: ``mcp-n8n`` / ``python -m mcp_n8n``.

Loads configuration, configures logging, and runs the selected transport.
On the stdio transport SIGINT and SIGTERM stop the server and the process
exits with status 0.
"""

from __future__ import annotations

import asyncio
import signal
import sys

from mcp_n8n.config import AppConfig, load_config
from mcp_n8n.dispatcher import MCPDispatcher
from mcp_n8n.logging import get_logger, setup_logging
from mcp_n8n.server import MCPServer

logger = get_logger(__name__)


def install_signal_handlers(loop: asyncio.AbstractEventLoop, server: MCPServer) -> None:
    """Make SIGINT and SIGTERM stop the stdio server from the event loop."""

    def _shutdown(sig: signal.Signals) -> None:
        logger.info("Received signal, shutting down", extra={"signal": sig.name})
        server.stop()

    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            loop.add_signal_handler(sig, _shutdown, sig)
        except (ValueError, NotImplementedError):
            logger.debug("Signal handling not supported", extra={"signal": sig.name})


async def serve_stdio(config: AppConfig) -> None:
    """Serve the stdio transport until EOF or a shutdown signal."""
    server = MCPServer(dispatcher=MCPDispatcher(identity=config.catalog))
    install_signal_handlers(asyncio.get_running_loop(), server)
    await server.run()


def run(config: AppConfig) -> None:
    """Run the transport named in the configuration until it finishes."""
    if config.server.transport == "http":
        from mcp_n8n.http_app import run_server

        run_server(config)
        return

    asyncio.run(serve_stdio(config))


def main(argv: list[str] | None = None) -> int:
    """
    Entry point.

    Returns:
        Process exit status: 0 on EOF or signal, 1 on an unexpected error.
    """
    config = load_config(cli_args=argv)
    setup_logging(config.logging)

    try:
        run(config)
    except Exception:
        logger.exception("Server error")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
