"""
Vibe MCP Server
Serves repository prompts, agents, instructions, skills and chat modes over MCP.
"""

__version__ = "0.1.0"
__package_name__ = "vibe-mcp"

__all__ = ["__version__", "__package_name__"]
