"""
Search Assets Tool

Keyword search over asset names, locations, titles and descriptions.
"""

from typing import Any

from vibe_mcp.assets import AssetCategory
from vibe_mcp.mcp_types import MCPErrorCode, ToolHandlerResult, ToolInput
from vibe_mcp.tools.base import AssetTool


class SearchAssetsTool(AssetTool):
    """Find assets containing every given keyword."""

    @property
    def name(self) -> str:
        return "search_assets"

    @property
    def description(self) -> str:
        return """Searches assets by keywords.

Keywords are space-separated and case-insensitive. An asset matches only when
EVERY keyword appears in its name, location, title or description.

Location is the path below the category directory with the category suffix
removed ("web/scraper/" for .cfg/skills/web/scraper/SKILL.md, "review.it" for
.cfg/prompts/review.it.prompt.md). The asset directory, category directory
and filename suffix (".cfg", "prompts", ".prompt.md") are not searchable.
File content is not searched either.

Examples:
- search_assets(keywords="review") - anything about reviews
- search_assets(keywords="git commit", category="instruction") - both words, instructions only"""

    @property
    def inputSchema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "keywords": {
                    "type": "string",
                    "description": "Search keywords (space-separated, all must match)"
                },
                "category": self.categorySchema()
            },
            "required": ["keywords"]
        }

    async def run(self, input: ToolInput) -> ToolHandlerResult:
        keywords = input.get("keywords")

        if keywords is None or keywords == "":
            return self.errorResponse(MCPErrorCode.INVALID_INPUT, "Keywords are required")

        invalid = self.checkInput(input)
        if invalid:
            return invalid

        category = input.get("category")
        summaries = self.registry.search_assets(
            keywords,
            category=AssetCategory(category) if category else None,
        )

        return ToolHandlerResult(
            success=True,
            result=self.createSuccessResult({
                "assets": [s.to_dict() for s in summaries],
                "count": len(summaries)
            })
        )
