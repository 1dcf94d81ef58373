"""
Config Module
Configuration management.
"""

from .settings import (
    Config,
    ConfigManager,
    DEFAULT_ASSETS_DIR,
    DEFAULT_HOST,
    DEFAULT_PORT,
    get_repo_root,
    validate_port,
)

__all__ = [
    "Config",
    "ConfigManager",
    "DEFAULT_ASSETS_DIR",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "get_repo_root",
    "validate_port",
]
