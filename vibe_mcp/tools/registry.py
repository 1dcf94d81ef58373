"""
Tool Registry
Manages tool registration, discovery, and execution.
"""

import uuid
from typing import Dict, Any, List, Optional
from datetime import datetime, timezone

from mcp.types import Tool as MCPTool

from vibe_mcp.mcp_types import (
    ToolHandler, ToolContext, ToolError,
    ToolExecution, ToolExecutionResult, MCPErrorCode,
)
from vibe_mcp.tools.base import BaseTool


class ToolRegistry:
    """Tool Registry Implementation."""

    def __init__(self, logger):
        self.logger = logger
        self.tools: Dict[str, BaseTool] = {}
        self.handlers: Dict[str, ToolHandler] = {}

    def register(self, tool: BaseTool) -> None:
        """Register a tool with the registry."""
        if tool.name in self.tools:
            raise ValueError(f"Tool {tool.name} is already registered")

        self.tools[tool.name] = tool
        self.logger.info(f"Tool registered: {tool.name}")

    def registerHandler(self, toolName: str, handler: ToolHandler) -> None:
        """Register a tool handler."""
        if toolName not in self.tools:
            raise ValueError(f"Tool {toolName} not found in registry")

        self.handlers[toolName] = handler
        self.logger.debug(f"Tool handler registered: {toolName}")

    def get(self, toolName: str) -> Optional[BaseTool]:
        """Get a tool by name."""
        return self.tools.get(toolName)

    def getHandler(self, toolName: str) -> Optional[ToolHandler]:
        """Get a tool handler by name."""
        return self.handlers.get(toolName)

    def listTools(self) -> List[BaseTool]:
        """List all registered tools."""
        return list(self.tools.values())

    def hasTool(self, toolName: str) -> bool:
        """Check if a tool is registered."""
        return toolName in self.tools

    async def execute(self, toolName: str, input: Dict[str, Any], context: ToolContext) -> ToolExecutionResult:
        """Execute a tool with input and context."""
        tool = self.get(toolName)
        if not tool:
            raise ValueError(f"Tool {toolName} not found")

        handler = self.getHandler(toolName)
        if not handler:
            raise ValueError(f"Handler for tool {toolName} not found")

        execution = ToolExecution(
            id=str(uuid.uuid4()),
            toolName=toolName,
            input=input,
            context=context,
            startTime=datetime.now(timezone.utc).isoformat(),
            status='running'
        )

        try:
            result = await handler(input, context)

            self._finish(execution, 'completed')
            execution.result = result.result
            execution.error = result.error

            return ToolExecutionResult(
                execution=execution,
                success=result.success,
                result=result.result,
                error=result.error
            )

        except Exception as error:
            self.logger.error(f"Tool {toolName} raised: {error}")
            self._finish(execution, 'failed')
            execution.error = ToolError(
                code=MCPErrorCode.TOOL_EXECUTION_ERROR,
                message=str(error)
            )

            return ToolExecutionResult(
                execution=execution,
                success=False,
                error=execution.error
            )

    def _finish(self, execution: ToolExecution, status: str) -> None:
        execution.status = status
        execution.endTime = datetime.now(timezone.utc).isoformat()
        execution.duration = int((datetime.fromisoformat(execution.endTime) -
                                  datetime.fromisoformat(execution.startTime)).total_seconds() * 1000)
        self.logger.debug(f"Tool {execution.toolName} {status} in {execution.duration}ms")

    def getToolSchemas(self) -> List[MCPTool]:
        """Get tool schemas for MCP protocol - returns proper MCP Tool objects."""
        return [
            MCPTool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.inputSchema
            )
            for tool in self.listTools()
        ]
