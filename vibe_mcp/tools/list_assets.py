"""
List Assets Tool

Lists repository assets, optionally filtered by category and locale.
"""

from typing import Any

from vibe_mcp.assets import AssetCategory
from vibe_mcp.mcp_types import ToolHandlerResult, ToolInput
from vibe_mcp.tools.base import AssetTool


class ListAssetsTool(AssetTool):
    """List assets as lightweight summaries (no content)."""

    @property
    def name(self) -> str:
        return "list_assets"

    @property
    def description(self) -> str:
        return """Lists all repository assets with optional filtering by category and locale.

Returns {assets: [{id, category, name, path, locale?, description?}], count}.
Use get_asset with an id from the results to read the full content.

Examples:
- list_assets() - everything
- list_assets(category="prompt") - prompts only
- list_assets(category="prompt", locale="it") - Italian prompts"""

    @property
    def inputSchema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "category": self.categorySchema(),
                "locale": {
                    "type": "string",
                    "description": "Filter by locale (e.g., 'it' for Italian)"
                }
            },
            "required": []
        }

    async def run(self, input: ToolInput) -> ToolHandlerResult:
        invalid = self.checkInput(input)
        if invalid:
            return invalid

        category = input.get("category")
        locale = input.get("locale")

        summaries = self.registry.list_assets(
            category=AssetCategory(category) if category else None,
            locale=locale or None,
        )

        return ToolHandlerResult(
            success=True,
            result=self.createSuccessResult({
                "assets": [s.to_dict() for s in summaries],
                "count": len(summaries)
            })
        )
