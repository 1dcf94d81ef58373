"""
Utils Module
"""

from .logger import Logger, configure_logging

__all__ = ["Logger", "configure_logging"]
