"""
Get Asset Tool

Retrieves a single asset, with full content, by its id.
"""

from typing import Any

from vibe_mcp.mcp_types import MCPErrorCode, ToolHandlerResult, ToolInput
from vibe_mcp.tools.base import AssetTool


class GetAssetTool(AssetTool):
    """Fetch one asset by exact id."""

    @property
    def name(self) -> str:
        return "get_asset"

    @property
    def description(self) -> str:
        return """Retrieves a specific asset by ID with full content.

IDs have the form "{category}:{path}", as returned by list_assets and search_assets.
Example: get_asset(id="prompt:.cfg/prompts/code-review.prompt.md")"""

    @property
    def inputSchema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "id": {
                    "type": "string",
                    "description": "Asset ID (e.g., 'prompt:.cfg/prompts/code-review.prompt.md')"
                }
            },
            "required": ["id"]
        }

    async def run(self, input: ToolInput) -> ToolHandlerResult:
        asset_id = input.get("id")

        if asset_id is None or asset_id == "":
            return self.errorResponse(MCPErrorCode.INVALID_INPUT, "Asset ID is required")

        invalid = self.checkInput(input)
        if invalid:
            return invalid

        asset = self.registry.get_asset(asset_id)
        if asset is None:
            return self.errorResponse(
                MCPErrorCode.RESOURCE_NOT_FOUND,
                f"Asset not found: {asset_id}"
            )

        return ToolHandlerResult(
            success=True,
            result=self.createSuccessResult(asset.to_dict())
        )
