"""
Asset Loader

Turns discovered files into Asset records:
- reads the raw text (stored verbatim)
- derives name and optional locale from the filename
- extracts title/description/tags from a leading frontmatter block

Frontmatter parsing is line oriented on purpose. Only flat
``key: value`` pairs are read, so nested YAML is never interpreted.
"""

import asyncio
import logging
import re
from pathlib import PurePosixPath

from vibe_mcp.assets.discovery import category_rule
from vibe_mcp.assets.types import (
    ASSET_ENCODING,
    Asset,
    AssetCategory,
    AssetMetadata,
    DiscoveredFile,
)

logger = logging.getLogger(__name__)


FRONTMATTER_PATTERN = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)
KEY_VALUE_PATTERN = re.compile(r"""^(\w+):\s*(?:"([^"]*)"|'([^']*)'|(.+?))\s*$""")
LOCALE_PATTERN = re.compile(r"^(.+)\.([a-z]{2})$")

QUOTES = ("'", '"')


# =========================================================================
# Name / locale
# =========================================================================

def split_locale(base_name: str) -> tuple[str, str | None]:
    """Split ``name.xx`` into (name, "xx"); other names are returned unchanged."""
    match = LOCALE_PATTERN.match(base_name)
    if match:
        return match.group(1), match.group(2)
    return base_name, None


def derive_name(category: AssetCategory, relative_path: str) -> tuple[str, str | None]:
    """
    Derive (name, locale) from an asset's repo-relative path.

    Skills are one SKILL.md per directory, so the directory is the name.
    Everything else is the filename minus its category suffix, with an
    optional two-letter locale segment split off:

        code-review.prompt.md     -> ("code-review", None)
        create-prd.it.prompt.md   -> ("create-prd", "it")
        skills/mcp-builder/SKILL.md -> ("mcp-builder", None)
    """
    path = PurePosixPath(relative_path)

    if category is AssetCategory.SKILL:
        return path.parent.name, None

    suffix = category_rule(category).suffix
    filename = path.name
    base_name = filename[: -len(suffix)] if filename.endswith(suffix) else filename
    return split_locale(base_name)


# =========================================================================
# Frontmatter
# =========================================================================

def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] in QUOTES and value[0] == value[-1]:
        return value[1:-1]
    return value


def parse_tags(value: str) -> tuple[str, ...]:
    """Parse ``a, b`` or ``[a, "b"]`` into a tuple of tags."""
    if value.startswith("["):
        value = value[1:]
    if value.endswith("]"):
        value = value[:-1]
    tags = (_unquote(raw.strip()) for raw in value.split(","))
    return tuple(tag for tag in tags if tag)


def parse_frontmatter(content: str) -> AssetMetadata | None:
    """
    Extract metadata from a leading ``---`` delimited block.

    Returns None when there is no well-formed block or when the block
    holds none of title/description/tags.
    """
    match = FRONTMATTER_PATTERN.match(content)
    if not match:
        return None

    fields: dict = {}
    for line in re.split(r"\r?\n", match.group(1)):
        if not line.strip() or line.lstrip().startswith("#"):
            continue

        # Indented lines belong to nested values and never match
        kv = KEY_VALUE_PATTERN.match(line.rstrip())
        if not kv:
            continue

        key = kv.group(1).lower()
        value = next(g for g in kv.groups()[1:] if g is not None)

        if key in ("title", "description"):
            fields[key] = value
        elif key == "tags":
            fields["tags"] = parse_tags(value)

    if not fields:
        return None
    return AssetMetadata(**fields)


# =========================================================================
# Loading
# =========================================================================

def load_asset(file: DiscoveredFile) -> Asset | None:
    """Load one asset. Returns None (and logs) if the file cannot be read."""
    try:
        # Decode bytes directly so line endings are preserved verbatim
        content = file.absolute_path.read_bytes().decode(ASSET_ENCODING)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to load asset {file.relative_path}: {e}")
        return None

    name, locale = derive_name(file.category, file.relative_path)

    return Asset(
        id=Asset.make_id(file.category, file.relative_path),
        category=file.category,
        name=name,
        path=file.relative_path,
        content=content,
        locale=locale,
        metadata=parse_frontmatter(content),
    )


async def load_assets(files: list[DiscoveredFile]) -> list[Asset]:
    """Load every file concurrently, skipping the ones that fail."""
    results = await asyncio.gather(*(asyncio.to_thread(load_asset, f) for f in files))
    return [asset for asset in results if asset is not None]
