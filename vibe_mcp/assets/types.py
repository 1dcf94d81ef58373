"""
Asset Types
Data model shared by discovery, loading and the registry.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any


class AssetCategory(str, Enum):
    """Closed set of asset categories, one per source directory."""
    PROMPT = "prompt"
    AGENT = "agent"
    INSTRUCTION = "instruction"
    SKILL = "skill"
    CHATMODE = "chatmode"

    @classmethod
    def values(cls) -> list[str]:
        return [category.value for category in cls]


ASSET_ENCODING = "utf-8"


@dataclass(frozen=True)
class DiscoveredFile:
    """A candidate asset file found on disk."""
    absolute_path: Path
    relative_path: str  # forward slashes, relative to the repo root
    category: AssetCategory


@dataclass(frozen=True)
class AssetMetadata:
    """Flat fields extracted from an asset's frontmatter block."""
    title: str | None = None
    description: str | None = None
    tags: tuple[str, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.title is not None:
            data["title"] = self.title
        if self.description is not None:
            data["description"] = self.description
        if self.tags is not None:
            data["tags"] = list(self.tags)
        return data


@dataclass(frozen=True)
class AssetSummary:
    """Lightweight asset view (no content) returned by list and search."""
    id: str
    category: AssetCategory
    name: str
    path: str
    locale: str | None = None
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "category": self.category.value,
            "name": self.name,
            "path": self.path,
        }
        if self.locale:
            data["locale"] = self.locale
        if self.description:
            data["description"] = self.description
        return data


@dataclass(frozen=True)
class Asset:
    """A loaded asset: raw content plus derived fields."""
    id: str
    category: AssetCategory
    name: str
    path: str
    content: str
    encoding: str = ASSET_ENCODING
    locale: str | None = None
    metadata: AssetMetadata | None = None

    @staticmethod
    def make_id(category: AssetCategory, relative_path: str) -> str:
        return f"{category.value}:{relative_path}"

    @property
    def title(self) -> str | None:
        return self.metadata.title if self.metadata else None

    @property
    def description(self) -> str | None:
        return self.metadata.description if self.metadata else None

    def to_summary(self) -> AssetSummary:
        return AssetSummary(
            id=self.id,
            category=self.category,
            name=self.name,
            path=self.path,
            locale=self.locale,
            description=self.description,
        )

    def to_dict(self) -> dict[str, Any]:
        """Full JSON-ready record, optional fields omitted when absent."""
        data: dict[str, Any] = {
            "id": self.id,
            "category": self.category.value,
            "name": self.name,
            "path": self.path,
        }
        if self.locale:
            data["locale"] = self.locale
        data["content"] = self.content
        data["encoding"] = self.encoding
        if self.metadata:
            data["metadata"] = self.metadata.to_dict()
        return data
