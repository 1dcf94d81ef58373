"""Tests for file discovery."""

import os

import pytest

from vibe_mcp.assets.discovery import (
    category_rule,
    discover_assets,
    discover_category,
    to_forward_slashes,
)
from vibe_mcp.assets.types import AssetCategory

from conftest import SAMPLE_ASSET_COUNT, write_assets


class TestCategoryRule:
    """Test per-category discovery rules."""

    def test_every_category_has_a_rule(self):
        """Should resolve a rule for each category."""
        for category in AssetCategory:
            assert category_rule(category).subdir

    def test_only_skills_are_recursive(self):
        """Skills nest one SKILL.md per directory; the rest are flat."""
        recursive = [c for c in AssetCategory if category_rule(c).recursive]
        assert recursive == [AssetCategory.SKILL]

    def test_suffix_matching(self):
        """Should require the suffix plus a non-empty base name."""
        rule = category_rule(AssetCategory.PROMPT)
        assert rule.matches("review.prompt.md")
        assert not rule.matches(".prompt.md")
        assert not rule.matches("review.agent.md")

    def test_skill_requires_exact_filename(self):
        """Should match SKILL.md only."""
        rule = category_rule(AssetCategory.SKILL)
        assert rule.matches("SKILL.md")
        assert not rule.matches("MYSKILL.md")
        assert not rule.matches("skill.md")


class TestDiscoverAssets:
    """Test discover_assets / discover_category."""

    def test_discovers_all_categories(self, asset_repo):
        """Should find every matching file across categories."""
        files = discover_assets(asset_repo)

        assert len(files) == SAMPLE_ASSET_COUNT
        assert {f.category for f in files} == set(AssetCategory)

    def test_relative_paths_use_forward_slashes(self, asset_repo):
        """Should produce repo-relative forward-slash paths."""
        files = discover_assets(asset_repo)
        paths = {f.relative_path for f in files}

        assert ".cfg/skills/web/scraper/SKILL.md" in paths
        assert all("\\" not in p for p in paths)
        assert all(not p.startswith("/") for p in paths)

    def test_absolute_paths_point_at_files(self, asset_repo):
        """Should keep an absolute path for the loader."""
        for f in discover_assets(asset_repo):
            assert f.absolute_path.is_absolute()
            assert f.absolute_path.is_file()

    def test_flat_categories_ignore_subdirectories(self, asset_repo):
        """Should not descend into subdirectories of flat categories."""
        prompts = discover_category(asset_repo, AssetCategory.PROMPT)
        paths = [f.relative_path for f in prompts]

        assert ".cfg/prompts/nested/deep.prompt.md" not in paths
        assert ".cfg/prompts/notes.md" not in paths
        assert len(paths) == 3

    def test_recursive_skill_discovery(self, asset_repo):
        """Should find SKILL.md at any depth, ignoring other files."""
        skills = discover_category(asset_repo, AssetCategory.SKILL)

        assert sorted(f.relative_path for f in skills) == [
            ".cfg/skills/mcp-builder/SKILL.md",
            ".cfg/skills/web/scraper/SKILL.md",
        ]

    def test_missing_directories_yield_nothing(self, tmp_path):
        """A repo without asset directories is not an error."""
        assert discover_assets(tmp_path) == []

    def test_partial_layout(self, tmp_path):
        """Missing categories contribute zero files while others are found."""
        write_assets(tmp_path, {".cfg/agents/solo.agent.md": "x"})

        files = discover_assets(tmp_path)

        assert [f.relative_path for f in files] == [".cfg/agents/solo.agent.md"]
        assert files[0].category is AssetCategory.AGENT

    def test_custom_assets_dir(self, tmp_path):
        """Should look under the configured asset directory."""
        write_assets(tmp_path, {".github/prompts/a.prompt.md": "x", ".cfg/prompts/b.prompt.md": "y"})

        files = discover_assets(tmp_path, assets_dir=".github")

        assert [f.relative_path for f in files] == [".github/prompts/a.prompt.md"]

    def test_category_path_that_is_a_file(self, tmp_path):
        """A file where a category directory should be is skipped."""
        write_assets(tmp_path, {".cfg/prompts": "oops", ".cfg/agents/a.agent.md": "x"})

        files = discover_assets(tmp_path)

        assert [f.category for f in files] == [AssetCategory.AGENT]

    @pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="needs POSIX permissions as non-root")
    def test_unreadable_subtree_is_skipped(self, tmp_path):
        """Permission errors skip that subtree without aborting the scan."""
        write_assets(tmp_path, {
            ".cfg/skills/open/SKILL.md": "ok",
            ".cfg/skills/locked/SKILL.md": "hidden",
        })
        locked = tmp_path / ".cfg" / "skills" / "locked"
        locked.chmod(0)
        try:
            skills = discover_category(tmp_path, AssetCategory.SKILL)
        finally:
            locked.chmod(0o755)

        assert [f.relative_path for f in skills] == [".cfg/skills/open/SKILL.md"]

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_does_not_follow_directory_symlinks(self, tmp_path):
        """Recursion stays inside the category directory."""
        outside = tmp_path / "outside"
        write_assets(outside, {"escape/SKILL.md": "outside"})
        skills_dir = tmp_path / ".cfg" / "skills"
        skills_dir.mkdir(parents=True)
        os.symlink(outside, skills_dir / "link", target_is_directory=True)

        assert discover_category(tmp_path, AssetCategory.SKILL) == []


class TestToForwardSlashes:
    """Test path normalization."""

    def test_converts_backslashes(self):
        assert to_forward_slashes(".cfg\\prompts\\a.prompt.md") == ".cfg/prompts/a.prompt.md"

    def test_leaves_posix_paths(self):
        assert to_forward_slashes(".cfg/prompts/a.prompt.md") == ".cfg/prompts/a.prompt.md"
