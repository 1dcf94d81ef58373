"""
Assets Module
Discovery, loading and the in-memory registry of repository assets.
"""

from .types import Asset, AssetCategory, AssetMetadata, AssetSummary, DiscoveredFile
from .discovery import discover_assets, discover_category
from .loader import load_asset, load_assets, parse_frontmatter
from .registry import AssetRegistry, RegistryState, create_asset_registry

__all__ = [
    "Asset",
    "AssetCategory",
    "AssetMetadata",
    "AssetSummary",
    "DiscoveredFile",
    "discover_assets",
    "discover_category",
    "load_asset",
    "load_assets",
    "parse_frontmatter",
    "AssetRegistry",
    "RegistryState",
    "create_asset_registry",
]
