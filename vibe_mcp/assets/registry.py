"""
Asset Registry

Owns the asset set for the lifetime of the process. It is populated once by
``initialize()`` (discovery + concurrent loading) and read-only afterwards.
Queries before that raise RegistryNotInitializedError so an empty answer
always means "legitimately empty".
"""

import asyncio
import logging
from enum import Enum
from pathlib import Path, PurePosixPath

from vibe_mcp.assets.discovery import category_rule, discover_assets
from vibe_mcp.assets.loader import load_assets
from vibe_mcp.assets.types import Asset, AssetCategory, AssetSummary
from vibe_mcp.config import DEFAULT_ASSETS_DIR
from vibe_mcp.errors import RegistryNotInitializedError

logger = logging.getLogger(__name__)


class RegistryState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


def tokenize(keywords: str) -> list[str]:
    """Lowercase whitespace-separated tokens; empty for blank input."""
    return (keywords or "").lower().split()


class AssetRegistry:
    """In-memory, ID-keyed collection of every loaded asset."""

    def __init__(self, repo_root: Path, assets_dir: str = DEFAULT_ASSETS_DIR):
        self.repo_root = Path(repo_root)
        self.assets_dir = assets_dir
        self._state = RegistryState.UNINITIALIZED
        self._assets: dict[str, Asset] = {}
        self._search_text: dict[str, str] = {}
        self._lock = asyncio.Lock()

    @property
    def state(self) -> RegistryState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is RegistryState.READY

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def initialize(self) -> None:
        """
        Discover and load all assets, then mark the registry ready.

        Idempotent: later calls return immediately. Concurrent callers wait
        for the first one to finish.
        """
        async with self._lock:
            if self._state is RegistryState.READY:
                return

            self._state = RegistryState.INITIALIZING
            try:
                files = discover_assets(self.repo_root, self.assets_dir)
                assets = await load_assets(files)
            except BaseException:
                self._state = RegistryState.UNINITIALIZED
                raise

            for asset in sorted(assets, key=lambda a: a.id):
                self._assets[asset.id] = asset
                self._search_text[asset.id] = self._build_search_text(asset)

            self._state = RegistryState.READY

            skipped = len(files) - len(assets)
            logger.info(
                f"Asset registry ready: {len(assets)} asset(s) from {self.repo_root}"
                + (f" ({skipped} skipped)" if skipped else "")
            )

    def _require_ready(self) -> None:
        if self._state is not RegistryState.READY:
            raise RegistryNotInitializedError(self._state.value)

    def _build_search_text(self, asset: Asset) -> str:
        """Lowercased text that keyword search matches against."""
        parts = [asset.name, self._location(asset), asset.title or "", asset.description or ""]
        return "\n".join(parts).lower()

    def _location(self, asset: Asset) -> str:
        """
        The asset's path below its category directory, category suffix removed.

        ".cfg/prompts/review.it.prompt.md" -> "review.it"
        ".cfg/skills/web/scraper/SKILL.md" -> "web/scraper/"
        """
        rule = category_rule(asset.category)
        category_dir = PurePosixPath(self.assets_dir, rule.subdir).as_posix() + "/"
        location = asset.path
        if location.startswith(category_dir):
            location = location[len(category_dir):]
        if location.endswith(rule.suffix):
            location = location[: -len(rule.suffix)]
        return location

    # =========================================================================
    # Queries
    # =========================================================================

    def count(self) -> int:
        self._require_ready()
        return len(self._assets)

    def list_assets(
        self,
        category: AssetCategory | None = None,
        locale: str | None = None,
    ) -> list[AssetSummary]:
        """Summaries of all assets matching the optional filters."""
        self._require_ready()
        return [
            asset.to_summary()
            for asset in self._assets.values()
            if (category is None or asset.category is category)
            and (locale is None or asset.locale == locale)
        ]

    def get_asset(self, asset_id: str) -> Asset | None:
        """Exact lookup by id. None when no asset has this id."""
        self._require_ready()
        return self._assets.get(asset_id)

    def search_assets(self, keywords: str, category: AssetCategory | None = None) -> list[AssetSummary]:
        """
        Assets whose searchable text contains every keyword.

        Matching is a case-insensitive substring test per token, ANDed.
        Blank keywords match nothing.
        """
        self._require_ready()

        tokens = tokenize(keywords)
        if not tokens:
            return []

        return [
            asset.to_summary()
            for asset in self._assets.values()
            if (category is None or asset.category is category)
            and all(token in self._search_text[asset.id] for token in tokens)
        ]


async def create_asset_registry(repo_root: Path, assets_dir: str = DEFAULT_ASSETS_DIR) -> AssetRegistry:
    """Build a registry and initialize it."""
    registry = AssetRegistry(repo_root, assets_dir)
    await registry.initialize()
    return registry
