"""
MCP Types Module
Types and dataclasses for the MCP server implementation.
"""

from .tools import (
    # Enums
    ToolCategory,
    MCPErrorCode,

    # Core types
    TextContent,
    ToolInput,
    ToolContext,
    ToolResult,
    ToolError,
    ToolHandlerResult,
    ToolMetadata,

    # Validation
    ToolValidationError,
    ToolValidationResult,

    # Execution
    ToolExecution,
    ToolExecutionResult,

    # Type aliases
    ToolHandler,
)

__all__ = [
    "ToolCategory",
    "MCPErrorCode",
    "TextContent",
    "ToolInput",
    "ToolContext",
    "ToolResult",
    "ToolError",
    "ToolHandlerResult",
    "ToolMetadata",
    "ToolValidationError",
    "ToolValidationResult",
    "ToolExecution",
    "ToolExecutionResult",
    "ToolHandler",
]
