"""Tests for VibeMCPServer: initialization and tool dispatch."""

import json

import pytest
from mcp import types

from vibe_mcp.assets import RegistryState
from vibe_mcp.config import ConfigManager
from vibe_mcp.server import VibeMCPServer

from conftest import SAMPLE_ASSET_COUNT


def make_server(repo_root, **overrides):
    return VibeMCPServer(ConfigManager({"repo_root": str(repo_root), **overrides}))


def body(result: types.CallToolResult):
    return json.loads(result.content[0].text)


class TestInitialize:
    """Test server startup."""

    def test_handlers_registered(self, tmp_path):
        server = make_server(tmp_path)

        assert types.ListToolsRequest in server.server.request_handlers
        assert types.CallToolRequest in server.server.request_handlers

    @pytest.mark.asyncio
    async def test_initialize_loads_assets_and_tools(self, asset_repo):
        server = make_server(asset_repo)

        await server.initialize()

        assert server.asset_registry.is_ready
        assert server.asset_registry.count() == SAMPLE_ASSET_COUNT
        assert [t.name for t in server.tool_registry.getToolSchemas()] == [
            "list_assets", "get_asset", "search_assets"
        ]

    @pytest.mark.asyncio
    async def test_initialize_twice(self, asset_repo):
        """Second call must not re-register tools."""
        server = make_server(asset_repo)

        await server.initialize()
        registry = server.asset_registry
        await server.initialize()

        assert server.asset_registry is registry
        assert len(server.tool_registry.listTools()) == 3

    @pytest.mark.asyncio
    async def test_assets_dir_override(self, tmp_path):
        from conftest import write_assets
        write_assets(tmp_path, {".github/prompts/x.prompt.md": "x"})

        server = make_server(tmp_path, assets_dir=".github")
        await server.initialize()

        assert server.asset_registry.count() == 1

    def test_initialization_options(self, tmp_path):
        options = make_server(tmp_path).initialization_options()

        assert options.server_name == "vibe-mcp"
        assert options.capabilities.tools is not None


class TestCallTool:
    """Test VibeMCPServer.call_tool."""

    @pytest.mark.asyncio
    async def test_list_assets(self, asset_repo):
        server = make_server(asset_repo)
        await server.initialize()

        result = await server.call_tool("list_assets", {})

        assert result.isError is False
        assert body(result)["count"] == SAMPLE_ASSET_COUNT

    @pytest.mark.asyncio
    async def test_none_arguments(self, asset_repo):
        server = make_server(asset_repo)
        await server.initialize()

        result = await server.call_tool("list_assets", None)

        assert result.isError is False

    @pytest.mark.asyncio
    async def test_get_asset_not_found(self, asset_repo):
        server = make_server(asset_repo)
        await server.initialize()

        result = await server.call_tool("get_asset", {"id": "agent:nope"})

        assert result.isError is True
        assert body(result) == {"error": "Asset not found: agent:nope", "code": "RESOURCE_NOT_FOUND"}

    @pytest.mark.asyncio
    async def test_unknown_tool(self, asset_repo):
        server = make_server(asset_repo)
        await server.initialize()

        result = await server.call_tool("delete_everything", {})

        assert result.isError is True
        assert body(result)["code"] == "TOOL_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_before_initialize(self, asset_repo):
        """No tools exist until initialize() completes."""
        server = make_server(asset_repo)

        result = await server.call_tool("list_assets", {})

        assert result.isError is True
        assert body(result)["code"] == "TOOL_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_registry_not_ready_after_registration(self, asset_repo):
        """A registry that is not ready reports an error, never an empty list."""
        server = make_server(asset_repo)
        await server.initialize()
        server.asset_registry._state = RegistryState.INITIALIZING

        result = await server.call_tool("list_assets", {})

        assert result.isError is True
        assert "not initialized" in body(result)["error"]

    @pytest.mark.asyncio
    async def test_extra_argument_named_get(self, asset_repo):
        server = make_server(asset_repo)
        await server.initialize()

        result = await server.call_tool(
            "get_asset",
            {"id": "prompt:.cfg/prompts/code-review.prompt.md", "get": "x"}
        )

        assert result.isError is False
        assert body(result)["name"] == "code-review"
