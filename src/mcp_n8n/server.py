"""
stdio transport for the n8n MCP Server.

MCPServer reads one JSON-RPC message per line from stdin, processes it to
completion, and writes the response as one JSON line to stdout. Lines that
are not valid UTF-8 or not valid JSON are logged and skipped without a
response.
"""

from __future__ import annotations

import asyncio
import os
import stat
import sys
from typing import IO, TextIO

from mcp_n8n.context import CallerInfo
from mcp_n8n.dispatcher import MCPDispatcher
from mcp_n8n.logging import get_logger
from mcp_n8n.protocol import (
    JSONRPCError,
    create_internal_error,
    decode_message,
    format_error_response,
)

logger = get_logger(__name__)

# Longest accepted request line; validate_workflow bodies can be large
MAX_LINE_BYTES = 16 * 1024 * 1024


async def process_request(
    request_json: str,
    dispatcher: MCPDispatcher,
    caller: CallerInfo | None = None,
) -> str | None:
    """
    Process a single line of input and return the response line.

    Args:
        request_json: One line of raw JSON text.
        dispatcher: The MCP method dispatcher.
        caller: Optional CallerInfo for the request.

    Returns:
        JSON string containing the response, or None for notifications and
        for input that could not be decoded.
    """
    try:
        data = decode_message(request_json)
    except JSONRPCError as e:
        logger.error(
            "Error parsing request",
            extra={"reason": e.message, "line": request_json[:200]},
        )
        return None

    response = await dispatcher.handle_message(data, caller)
    if response is None:
        return None
    return response.to_json()


class MCPServer:
    """
    MCP Server that communicates via JSON-RPC 2.0 over stdio.

    Example:
        >>> server = MCPServer()
        >>> asyncio.run(server.run())

    Attributes:
        dispatcher: MCPDispatcher answering the requests.
        running: Whether the server is currently running.
    """

    def __init__(
        self,
        dispatcher: MCPDispatcher | None = None,
        stdin: IO[bytes] | TextIO | None = None,
        stdout: TextIO | None = None,
        reader: asyncio.StreamReader | None = None,
    ) -> None:
        """
        Args:
            dispatcher: Optional dispatcher. A default one is built if omitted.
            stdin: Optional input file. Uses sys.stdin if not provided.
            stdout: Optional output stream. Uses sys.stdout if not provided.
            reader: Optional pre-filled stream reader used instead of stdin.
        """
        self.dispatcher = dispatcher if dispatcher is not None else MCPDispatcher()
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._reader = reader
        self._transport: asyncio.BaseTransport | None = None
        self._pending_read: asyncio.Future[bytes] | None = None
        self.running = False
        self._caller = CallerInfo(transport="stdio")

    async def handle_request(self, request_json: str) -> str | None:
        """Handle a single line of input."""
        return await process_request(request_json, self.dispatcher, self._caller)

    async def run(self) -> None:
        """
        Serve requests until stdin reaches EOF or stop() is called.

        One request is handled end to end before the next line is read.
        """
        self.running = True
        logger.info(
            "MCP Server starting",
            extra={"transport": "stdio", "tools_count": len(self.dispatcher.registry)},
        )

        try:
            reader = self._reader if self._reader is not None else await self._open_stdin()

            while self.running:
                try:
                    line = await self._read_line(reader)
                    if not line:
                        break

                    try:
                        request_json = line.decode("utf-8").strip()
                    except UnicodeDecodeError as e:
                        logger.error(
                            "Invalid UTF-8 encoding in request",
                            extra={"reason": str(e)},
                        )
                        continue

                    if not request_json:
                        continue

                    response = await self.handle_request(request_json)
                    if response is not None:
                        self._write_response(response)

                except Exception as e:
                    logger.exception("Error in server loop")
                    error = create_internal_error(
                        f"Internal server error: {type(e).__name__}",
                        details={"exception": str(e)},
                    )
                    self._write_response(format_error_response(None, error).to_json())

        finally:
            self.running = False
            if self._transport is not None:
                self._transport.close()
                self._transport = None
            logger.info("MCP Server stopped")

    def stop(self) -> None:
        """Stop after the request currently being handled, or now if idle."""
        self.running = False
        if self._pending_read is not None:
            self._pending_read.cancel()

    async def _read_line(self, reader: asyncio.StreamReader) -> bytes:
        """Read one line; returns b"" at EOF or when stop() interrupts the read."""
        self._pending_read = asyncio.ensure_future(reader.readline())
        try:
            return await self._pending_read
        except asyncio.CancelledError:
            if self.running:
                raise
            return b""
        finally:
            self._pending_read = None

    async def _open_stdin(self) -> asyncio.StreamReader:
        loop = asyncio.get_running_loop()
        reader = asyncio.StreamReader(limit=MAX_LINE_BYTES)
        source = getattr(self._stdin, "buffer", self._stdin)

        # Regular files cannot be watched by the event loop
        if stat.S_ISREG(os.fstat(source.fileno()).st_mode):
            reader.feed_data(source.read())
            reader.feed_eof()
            return reader

        protocol = asyncio.StreamReaderProtocol(reader)
        self._transport, _ = await loop.connect_read_pipe(lambda: protocol, source)
        return reader

    def _write_response(self, response_json: str) -> None:
        self._stdout.write(response_json + "\n")
        self._stdout.flush()


def create_server(dispatcher: MCPDispatcher | None = None) -> MCPServer:
    """Create an stdio MCPServer serving the built-in tools."""
    return MCPServer(dispatcher=dispatcher)
