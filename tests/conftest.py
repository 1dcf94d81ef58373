"""
Shared pytest fixtures for Vibe MCP tests

Provides a sample repository of assets on disk plus the standard
logger and tool context mocks.
"""

import sys
from pathlib import Path
from unittest.mock import Mock

import pytest
import pytest_asyncio

# Add project root to Python path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


# ============================================================================
# Sample repository
# ============================================================================

SAMPLE_ASSETS = {
    ".cfg/prompts/code-review.prompt.md": (
        "---\n"
        "title: \"Code Review\"\n"
        "description: Review a pull request for bugs and style\n"
        "tags: [review, 'quality', \"git\"]\n"
        "---\n"
        "# Code Review\n\nCheck the diff.\n"
    ),
    ".cfg/prompts/create-prd.prompt.md": "# Create PRD\n\nWrite a product requirements document.\n",
    ".cfg/prompts/create-prd.it.prompt.md": (
        "---\n"
        "description: 'Crea un PRD'\n"
        "---\n"
        "# Crea PRD\n"
    ),
    ".cfg/prompts/notes.md": "not an asset\n",
    ".cfg/prompts/nested/deep.prompt.md": "prompts are flat, never discovered\n",
    ".cfg/agents/devops.agent.md": "# DevOps Agent\n\nDeploys things.\n",
    ".cfg/instructions/git.instructions.md": (
        "---\n"
        "description: Commit message conventions\n"
        "applyTo: \"**\"\n"
        "---\n"
        "Use conventional commits.\n"
    ),
    ".cfg/skills/mcp-builder/SKILL.md": (
        "---\n"
        "name: mcp-builder\n"
        "description: Build MCP servers\n"
        "---\n"
        "# MCP Builder\n"
    ),
    ".cfg/skills/mcp-builder/reference.md": "supporting file, not a skill\n",
    ".cfg/skills/web/scraper/SKILL.md": "# Scraper\n",
    ".cfg/chatmodes/lyra.chatmode.md": "---\ntitle: Lyra\n---\nYou are Lyra.\n",
}

SAMPLE_ASSET_COUNT = 8


def write_assets(root: Path, files: dict[str, str]) -> Path:
    """Write {relative_path: content} under root; returns root."""
    for relative_path, content in files.items():
        path = root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8"))
    return root


# ============================================================================
# Base Fixtures
# ============================================================================

@pytest.fixture
def asset_repo(tmp_path):
    """A repository root populated with SAMPLE_ASSETS."""
    return write_assets(tmp_path, SAMPLE_ASSETS)


@pytest.fixture
def logger():
    """
    Standard mock logger for all tests.
    """
    from vibe_mcp.utils.logger import Logger
    return Mock(spec=Logger)


@pytest.fixture
def mock_context():
    """
    Standard mock ToolContext for all tests.
    """
    from vibe_mcp.mcp_types.tools import ToolContext

    return ToolContext(
        requestId='test_req_123',
        timestamp=1234567890.0,
        toolName=None
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer environment variables out of config-dependent tests."""
    for name in ("ENVIRONMENT", "LOG_LEVEL", "VIBE_REPO_ROOT", "VIBE_ASSETS_DIR", "MCP_HOST", "MCP_PORT"):
        monkeypatch.delenv(name, raising=False)
    # load_dotenv() must not pick up a stray .env from the working directory
    monkeypatch.setattr("vibe_mcp.config.settings.load_dotenv", lambda *args, **kwargs: False)


@pytest_asyncio.fixture
async def ready_registry(asset_repo):
    """An AssetRegistry initialized from the sample repository."""
    from vibe_mcp.assets import create_asset_registry
    return await create_asset_registry(asset_repo)
