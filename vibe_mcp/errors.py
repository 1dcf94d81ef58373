"""
Errors
Exception types raised by the asset pipeline and the transports.
"""


class VibeMCPError(Exception):
    """Base class for vibe-mcp errors."""


class RegistryNotInitializedError(VibeMCPError):
    """Raised when the asset registry is queried before it is ready."""

    def __init__(self, state: str):
        super().__init__(f"Asset registry is not initialized (state: {state})")
        self.state = state


class TransportStartError(VibeMCPError):
    """Raised when a transport cannot start, e.g. the port is already bound."""
