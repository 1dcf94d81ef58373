"""
Tool-related types
Types specific to tool implementations - follows MCP specification.
"""

from typing import Dict, Any, List, Optional, Callable, Awaitable
from dataclasses import dataclass, field
from enum import Enum


class ToolCategory(Enum):
    """Tool categories for organization."""
    ASSETS = "assets"       # Read-only asset queries (list, get, search)
    UTILITY = "utility"     # Utilities


class MCPErrorCode(Enum):
    """MCP Error codes - follows MCP specification."""
    TOOL_NOT_FOUND = "TOOL_NOT_FOUND"
    INVALID_INPUT = "INVALID_INPUT"
    TOOL_EXECUTION_ERROR = "TOOL_EXECUTION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"


@dataclass
class TextContent:
    """Text content for tool results - follows MCP specification."""
    type: str
    text: str


class ToolInput(dict):
    """Tool input data (client arguments, read by key)."""


@dataclass
class ToolContext:
    """Tool execution context."""
    requestId: str
    timestamp: float
    toolName: Optional[str] = None


@dataclass
class ToolResult:
    """Tool execution result - follows MCP specification."""
    content: List[TextContent]
    isError: bool = False


@dataclass
class ToolError:
    """Tool error information."""
    code: MCPErrorCode
    message: str
    details: Optional[str] = None


@dataclass
class ToolHandlerResult:
    """Tool handler result."""
    success: bool
    result: Optional[ToolResult] = None
    error: Optional[ToolError] = None


@dataclass
class ToolMetadata:
    """Tool metadata."""
    category: ToolCategory
    version: str
    readOnly: bool = True
    description: Optional[str] = None


@dataclass
class ToolValidationError:
    """Tool validation error."""
    field: str
    message: str
    code: str


@dataclass
class ToolValidationResult:
    """Tool validation result."""
    valid: bool
    errors: List[ToolValidationError] = field(default_factory=list)


@dataclass
class ToolExecution:
    """Tool execution record."""
    id: str
    toolName: str
    input: Dict[str, Any]
    context: ToolContext
    startTime: str
    status: str
    endTime: Optional[str] = None
    duration: Optional[int] = None
    result: Optional[ToolResult] = None
    error: Optional[ToolError] = None


@dataclass
class ToolExecutionResult:
    """Tool execution result."""
    execution: ToolExecution
    success: bool
    result: Optional[ToolResult] = None
    error: Optional[ToolError] = None


# Type alias for tool handlers
ToolHandler = Callable[[Dict[str, Any], ToolContext], Awaitable[ToolHandlerResult]]
