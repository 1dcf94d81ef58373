"""
Settings
Configuration management for the Vibe MCP Server.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


DEFAULT_ASSETS_DIR = ".cfg"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000


def validate_port(value: int) -> int:
    """Return the port if it is within 1-65535, else raise ValueError."""
    if not 1 <= value <= 65535:
        raise ValueError(f"Invalid port: {value}")
    return value


def get_repo_root() -> Path:
    """
    Get the repository root to serve assets from.
    
    Uses VIBE_REPO_ROOT if set, otherwise the current working directory.
    """
    env_root = os.getenv("VIBE_REPO_ROOT")
    if env_root:
        return Path(os.path.expanduser(env_root)).resolve()
    return Path.cwd()


@dataclass
class Config:
    """Server configuration."""
    environment: str = "development"
    log_level: str = "DEBUG"
    repo_root: Path = field(default_factory=Path.cwd)
    assets_dir: str = DEFAULT_ASSETS_DIR
    http: bool = False
    host: str = DEFAULT_HOST
    http_port: int = DEFAULT_PORT
    
    @property
    def is_production(self) -> bool:
        return self.environment == "production"
    
    @property
    def is_development(self) -> bool:
        return self.environment == "development"
    
    @property
    def transport_label(self) -> str:
        return f"HTTP (port {self.http_port})" if self.http else "stdio"


class ConfigManager:
    """Configuration manager - loads and provides config."""
    
    def __init__(self, overrides: Optional[dict] = None):
        self._config: Optional[Config] = None
        self._overrides = {k: v for k, v in (overrides or {}).items() if v is not None}
    
    async def load(self) -> None:
        """Load configuration from environment (.env honoured), then apply overrides."""
        load_dotenv()
        env = os.getenv("ENVIRONMENT", "development")
        values = {
            "environment": env,
            "log_level": os.getenv("LOG_LEVEL", "DEBUG" if env != "production" else "INFO"),
            "repo_root": get_repo_root(),
            "assets_dir": os.getenv("VIBE_ASSETS_DIR", DEFAULT_ASSETS_DIR),
            "host": os.getenv("MCP_HOST", DEFAULT_HOST),
            "http_port": validate_port(int(os.getenv("MCP_PORT", str(DEFAULT_PORT)))),
        }
        values.update(self._overrides)
        values["repo_root"] = Path(values["repo_root"]).resolve()
        self._config = Config(**values)
    
    def get(self) -> Config:
        """Get current configuration."""
        if self._config is None:
            # Create default config if not loaded
            self._config = Config(**self._overrides)
        return self._config
