"""
Tools Module

The 3 MCP tools for the Vibe MCP Server:
- list_assets: List assets, filtered by category/locale
- get_asset: Fetch one asset with full content
- search_assets: Keyword search (all keywords must match)
"""

from .base import BaseTool, AssetTool
from .registry import ToolRegistry

from .list_assets import ListAssetsTool
from .get_asset import GetAssetTool
from .search_assets import SearchAssetsTool

__all__ = [
    "BaseTool",
    "AssetTool",
    "ToolRegistry",
    "ListAssetsTool",
    "GetAssetTool",
    "SearchAssetsTool",
]
