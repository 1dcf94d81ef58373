"""
Logger
Structured logging for the Vibe MCP Server.

Everything goes to stderr: stdout carries the MCP stdio protocol.
"""

import logging
import sys
from typing import Optional


class Logger:
    """Simple logger wrapper with structured logging support."""
    
    def __init__(self, name: str = "vibe-mcp", level: str = "DEBUG"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper(), logging.DEBUG))
        
        # Only add handler if none exist
        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            ))
            self.logger.addHandler(handler)
    
    def debug(self, message: str, extra: Optional[dict] = None):
        self.logger.debug(message, extra=extra)
    
    def info(self, message: str, extra: Optional[dict] = None):
        self.logger.info(message, extra=extra)
    
    def warning(self, message: str, extra: Optional[dict] = None):
        self.logger.warning(message, extra=extra)
    
    def error(self, message: str, extra: Optional[dict] = None):
        self.logger.error(message, extra=extra)
    
    def setLevel(self, level: str):
        self.logger.setLevel(getattr(logging, level.upper(), logging.DEBUG))
    
    def isEnabledFor(self, level: int) -> bool:
        return self.logger.isEnabledFor(level)


def configure_logging(level: str = "INFO") -> None:
    """Route the pipeline's module loggers (``vibe_mcp.*``) to stderr."""
    Logger(name="vibe_mcp", level=level)
