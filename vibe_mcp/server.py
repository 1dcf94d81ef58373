#!/usr/bin/env python3
"""
Vibe MCP Server
Main server implementation: asset registry + tools behind an MCP Server.
"""

import json
import time
import uuid
from typing import Any, Optional

from mcp import types
from mcp.server import Server
from mcp.server.lowlevel import NotificationOptions
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server

from vibe_mcp import __version__, __package_name__
from vibe_mcp.assets import AssetRegistry
from vibe_mcp.config import ConfigManager
from vibe_mcp.mcp_types import MCPErrorCode, ToolContext, ToolInput, ToolResult
from vibe_mcp.tools import ToolRegistry, ListAssetsTool, GetAssetTool, SearchAssetsTool
from vibe_mcp.utils import Logger, configure_logging


def _error_content(code: MCPErrorCode, message: str) -> list[types.TextContent]:
    payload = json.dumps({"error": message, "code": code.value}, indent=2)
    return [types.TextContent(type="text", text=payload)]


class VibeMCPServer:
    """Main MCP Server for repository assets."""

    def __init__(self, config: Optional[ConfigManager] = None):
        # Initialize configuration
        self.config = config or ConfigManager()

        # Initialize MCP Server
        self.server = Server(__package_name__)

        # Initialize logger
        self.logger = Logger(name=__package_name__, level=self.config.get().log_level)

        # Populated by initialize()
        self.asset_registry: Optional[AssetRegistry] = None
        self.tool_registry = ToolRegistry(self.logger)

        # Set up MCP protocol handlers
        self._setup_handlers()

    def _setup_handlers(self):
        """Set up MCP protocol request handlers using decorators."""

        @self.server.list_tools()
        async def handle_list_tools() -> list[types.Tool]:
            """List available tools."""
            tools = self.tool_registry.getToolSchemas()
            self.logger.debug(f"Exposing {len(tools)} tools")
            return tools

        # Tools validate their own input so errors keep the JSON payload shape
        @self.server.call_tool(validate_input=False)
        async def handle_call_tool(name: str, arguments: dict) -> types.CallToolResult:
            """Execute a tool - MCP tools/call handler."""
            return await self.call_tool(name, arguments)

    async def call_tool(self, name: str, arguments: Optional[dict[str, Any]]) -> types.CallToolResult:
        """
        Run a tool and convert its outcome into an MCP CallToolResult.

        Failures (unknown tool, bad input, missing asset) come back as
        isError results with a JSON ``{"error", "code"}`` payload; nothing
        is raised to the protocol layer.
        """
        if not self.tool_registry.hasTool(name):
            self.logger.warning(f"Tool not found: {name}")
            return types.CallToolResult(
                content=_error_content(MCPErrorCode.TOOL_NOT_FOUND, f"Tool '{name}' not found"),
                isError=True,
            )

        context = ToolContext(
            requestId=f"req_{uuid.uuid4().hex[:12]}",
            timestamp=time.time(),
            toolName=name
        )

        outcome = await self.tool_registry.execute(name, ToolInput(**(arguments or {})), context)

        if outcome.result is not None:
            return self._to_call_tool_result(outcome.result)

        error = outcome.error
        return types.CallToolResult(
            content=_error_content(
                error.code if error else MCPErrorCode.INTERNAL_ERROR,
                error.message if error else "Unknown error"
            ),
            isError=True,
        )

    @staticmethod
    def _to_call_tool_result(result: ToolResult) -> types.CallToolResult:
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=item.text) for item in result.content],
            isError=result.isError,
        )

    def _register_core_tools(self):
        """Register the 3 asset tools."""
        tools = [
            ListAssetsTool(self.logger, self.asset_registry),
            GetAssetTool(self.logger, self.asset_registry),
            SearchAssetsTool(self.logger, self.asset_registry),
        ]

        for tool in tools:
            self.tool_registry.register(tool)
            self.tool_registry.registerHandler(tool.name, tool.execute)

        self.logger.info("Registered 3 tools: list_assets, get_asset, search_assets")

    async def initialize(self):
        """
        Load configuration, build the asset registry and register tools.

        Must complete before any transport accepts requests. Safe to call twice.
        """
        if self.asset_registry is not None and self.asset_registry.is_ready:
            return

        await self.config.load()
        config = self.config.get()
        self.logger.setLevel(config.log_level)
        configure_logging(config.log_level)

        self.asset_registry = AssetRegistry(config.repo_root, config.assets_dir)
        await self.asset_registry.initialize()
        self._register_core_tools()

        self.logger.info(f"Serving {self.asset_registry.count()} assets from {config.repo_root}")

    def initialization_options(self) -> InitializationOptions:
        return InitializationOptions(
            server_name=__package_name__,
            server_version=__version__,
            capabilities=self.server.get_capabilities(
                notification_options=NotificationOptions(),
                experimental_capabilities={}
            ),
        )

    async def start(self):
        """Start the MCP server on stdio (one implicit client until exit)."""
        try:
            await self.initialize()

            async with stdio_server() as (read_stream, write_stream):
                self.logger.info("Vibe MCP Server running on stdio")
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.initialization_options(),
                )

        except Exception as e:
            self.logger.error(f"Failed to start server: {e}")
            raise


async def run_stdio(config: Optional[ConfigManager] = None):
    """Run in stdio mode (for editors that spawn the server)."""
    server = VibeMCPServer(config)
    await server.start()
