#!/usr/bin/env python3
"""
Vibe MCP Server - HTTP Transport
Serves MCP over Server-Sent Events with a single streaming slot.

Endpoints:
- GET  /health  - {"status": "ok"}
- GET  /sse     - opens the event stream (409 while another stream is active)
- POST /message - client-to-server messages (400 when no stream is active)
Anything else answers 404.
"""

import socket
from typing import Optional

import uvicorn
from mcp.server.sse import SseServerTransport
from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.types import Receive, Scope, Send

from vibe_mcp.config import DEFAULT_HOST, DEFAULT_PORT
from vibe_mcp.errors import TransportStartError
from vibe_mcp.server import VibeMCPServer


SSE_PATH = "/sse"
MESSAGE_PATH = "/message"


class SseSlot:
    """
    The single streaming slot: Idle <-> Streaming.

    acquire() never waits; a second client is rejected, not queued.
    The event loop is single threaded, so a plain flag is enough.
    """

    def __init__(self):
        self._streaming = False

    @property
    def streaming(self) -> bool:
        return self._streaming

    def acquire(self) -> bool:
        if self._streaming:
            return False
        self._streaming = True
        return True

    def release(self) -> None:
        self._streaming = False


class _Endpoint:
    """Wraps a coroutine so Starlette routes it as a raw ASGI app."""

    def __init__(self, handler):
        self.handler = handler

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.handler(scope, receive, send)


class HttpTransport:
    """Binds a VibeMCPServer to HTTP + SSE."""

    def __init__(self, mcp_server: VibeMCPServer, sse: Optional[SseServerTransport] = None):
        self.mcp_server = mcp_server
        self.logger = mcp_server.logger
        self.slot = SseSlot()
        self.sse = sse or SseServerTransport(MESSAGE_PATH)
        self.app = self._build_app()

    def _build_app(self) -> Starlette:
        async def not_found(request: Request, exc: HTTPException) -> JSONResponse:
            return JSONResponse({"error": "Not found"}, status_code=404)

        return Starlette(
            routes=[
                Route("/health", endpoint=self.health, methods=["GET"]),
                Route(SSE_PATH, endpoint=_Endpoint(self.handle_sse), methods=["GET"]),
                Route(MESSAGE_PATH, endpoint=_Endpoint(self.handle_message), methods=["POST"]),
            ],
            # Unknown paths and wrong methods are both plain 404s
            exception_handlers={404: not_found, 405: not_found},
        )

    async def health(self, request: Request) -> JSONResponse:
        """Health check endpoint."""
        return JSONResponse({"status": "ok"})

    async def handle_sse(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Open the event stream and run one MCP session on it."""
        if not self.slot.acquire():
            self.logger.warning("Rejected SSE connection: another stream is active")
            response = JSONResponse({"error": "SSE connection already active"}, status_code=409)
            await response(scope, receive, send)
            return

        self.logger.info("SSE client connected")
        try:
            async with self.sse.connect_sse(scope, receive, send) as (read_stream, write_stream):
                await self.mcp_server.server.run(
                    read_stream,
                    write_stream,
                    self.mcp_server.initialization_options(),
                )
        finally:
            self.slot.release()
            self.logger.info("SSE client disconnected")

    async def handle_message(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Forward a client message into the active stream."""
        if not self.slot.streaming:
            response = JSONResponse({"error": "No active SSE connection"}, status_code=400)
            await response(scope, receive, send)
            return

        started = False

        async def tracking_send(message):
            nonlocal started
            if message["type"] == "http.response.start":
                started = True
            await send(message)

        try:
            await self.sse.handle_post_message(scope, receive, tracking_send)
        except Exception as e:
            self.logger.error(f"Error handling POST message: {e}")
            if not started:
                response = JSONResponse({"error": "Internal server error"}, status_code=500)
                await response(scope, receive, send)


def bind_socket(host: str, port: int) -> socket.socket:
    """
    Bind the listening socket up front.

    Raises TransportStartError when the address is unavailable (e.g. the
    port is already in use) so startup aborts instead of running degraded.
    """
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port))
    except OSError as e:
        sock.close()
        raise TransportStartError(f"Cannot listen on {host}:{port}: {e}") from e
    sock.set_inheritable(True)
    return sock


async def serve(transport: HttpTransport, host: str, port: int, log_level: str = "info") -> None:
    """Run uvicorn on a pre-bound socket until shutdown (SIGINT/SIGTERM)."""
    sock = bind_socket(host, port)
    bound_port = sock.getsockname()[1]

    config = uvicorn.Config(transport.app, log_level=log_level.lower())
    server = uvicorn.Server(config)

    transport.logger.info(f"MCP HTTP server listening on http://{host}:{bound_port}")
    transport.logger.info(f"  SSE endpoint: http://{host}:{bound_port}{SSE_PATH}")
    transport.logger.info(f"  Health check: http://{host}:{bound_port}/health")

    try:
        await server.serve(sockets=[sock])
    finally:
        sock.close()


async def run_http(mcp_server: VibeMCPServer, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """Initialize the server, then serve it over HTTP/SSE."""
    await mcp_server.initialize()
    config = mcp_server.config.get()
    await serve(HttpTransport(mcp_server), host, port, log_level=config.log_level)
