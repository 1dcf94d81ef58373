"""
File Discovery

Finds candidate asset files under the repository's asset directory:

    <assets>/prompts/*.prompt.md
    <assets>/agents/*.agent.md
    <assets>/instructions/*.instructions.md
    <assets>/chatmodes/*.chatmode.md
    <assets>/skills/**/SKILL.md
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from vibe_mcp.assets.types import AssetCategory, DiscoveredFile
from vibe_mcp.config import DEFAULT_ASSETS_DIR

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryRule:
    """Where a category lives and which filenames belong to it."""
    subdir: str
    suffix: str
    recursive: bool = False
    exact: bool = False  # filename must equal suffix

    def matches(self, filename: str) -> bool:
        if self.exact:
            return filename == self.suffix
        return filename.endswith(self.suffix) and len(filename) > len(self.suffix)


def category_rule(category: AssetCategory) -> CategoryRule:
    """Resolve the discovery rule for a category."""
    match category:
        case AssetCategory.PROMPT:
            return CategoryRule("prompts", ".prompt.md")
        case AssetCategory.AGENT:
            return CategoryRule("agents", ".agent.md")
        case AssetCategory.INSTRUCTION:
            return CategoryRule("instructions", ".instructions.md")
        case AssetCategory.CHATMODE:
            return CategoryRule("chatmodes", ".chatmode.md")
        case AssetCategory.SKILL:
            return CategoryRule("skills", "SKILL.md", recursive=True, exact=True)
    raise ValueError(f"No discovery rule for category: {category!r}")


def to_forward_slashes(path: str) -> str:
    """Normalize path separators so ids are the same on every platform."""
    return path.replace("\\", "/")


def _scan(directory: Path) -> list[os.DirEntry] | None:
    """List a directory, sorted by name. None if it cannot be read."""
    try:
        with os.scandir(directory) as it:
            return sorted(it, key=lambda entry: entry.name)
    except FileNotFoundError:
        logger.debug(f"Asset directory not found: {directory}")
    except NotADirectoryError:
        logger.warning(f"Expected a directory, found a file: {directory}")
    except OSError as e:
        logger.warning(f"Skipping unreadable directory {directory}: {e}")
    return None


def _find_flat(directory: Path, rule: CategoryRule) -> list[Path]:
    entries = _scan(directory)
    if entries is None:
        return []
    return [
        Path(entry.path)
        for entry in entries
        if entry.is_file(follow_symlinks=False) and rule.matches(entry.name)
    ]


def _find_recursive(directory: Path, rule: CategoryRule) -> list[Path]:
    entries = _scan(directory)
    if entries is None:
        return []

    found: list[Path] = []
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            found.extend(_find_recursive(Path(entry.path), rule))
        elif entry.is_file(follow_symlinks=False) and rule.matches(entry.name):
            found.append(Path(entry.path))
    return found


def discover_category(
    repo_root: Path,
    category: AssetCategory,
    assets_dir: str = DEFAULT_ASSETS_DIR,
) -> list[DiscoveredFile]:
    """Discover asset files of a single category."""
    rule = category_rule(category)
    directory = Path(repo_root) / assets_dir / rule.subdir

    paths = _find_recursive(directory, rule) if rule.recursive else _find_flat(directory, rule)

    return [
        DiscoveredFile(
            absolute_path=path,
            relative_path=to_forward_slashes(os.path.relpath(path, repo_root)),
            category=category,
        )
        for path in paths
    ]


def discover_assets(repo_root: Path, assets_dir: str = DEFAULT_ASSETS_DIR) -> list[DiscoveredFile]:
    """Discover asset files of every category under the repository root."""
    files: list[DiscoveredFile] = []
    for category in AssetCategory:
        found = discover_category(repo_root, category, assets_dir)
        logger.debug(f"Discovered {len(found)} {category.value} file(s)")
        files.extend(found)
    return files
