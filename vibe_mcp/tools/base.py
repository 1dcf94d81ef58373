"""
Base Tool Classes
Abstract base classes for tool implementations.
"""

import json
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional

from jsonschema import Draft7Validator

from vibe_mcp import __version__
from vibe_mcp.assets import AssetCategory, AssetRegistry
from vibe_mcp.errors import RegistryNotInitializedError
from vibe_mcp.mcp_types import (
    ToolInput, ToolResult, ToolError, ToolContext,
    ToolHandlerResult, ToolValidationResult, ToolValidationError,
    MCPErrorCode, TextContent, ToolCategory, ToolMetadata
)


class BaseTool(ABC):
    """Abstract base class for all tool implementations."""

    def __init__(self, logger, metadata: Optional[Dict[str, Any]] = None):
        self.logger = logger

        # Set default metadata values
        default_metadata = {
            'category': ToolCategory.UTILITY,
            'version': __version__,
            'readOnly': True,
        }

        # Merge with provided metadata
        if metadata:
            default_metadata.update(metadata)

        self.metadata = ToolMetadata(**default_metadata)

    @property
    @abstractmethod
    def name(self) -> str:
        """Tool name."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Tool description."""
        pass

    @property
    @abstractmethod
    def inputSchema(self) -> Dict[str, Any]:
        """Tool input schema (JSON Schema)."""
        pass

    @abstractmethod
    async def execute(self, input: ToolInput, context: ToolContext) -> ToolHandlerResult:
        """Execute the tool with input and context."""
        pass

    def validateInput(self, input: ToolInput) -> ToolValidationResult:
        """Validate tool input against the JSON schema."""
        validator = Draft7Validator(self.inputSchema)
        errors = []

        for error in sorted(validator.iter_errors(dict(input)), key=lambda e: list(e.path)):
            if error.validator == "required":
                # "'id' is a required property" -> id
                field = error.message.split("'")[1] if "'" in error.message else ""
            else:
                field = ".".join(str(p) for p in error.path)
            errors.append(ToolValidationError(
                field=field,
                message=f"Field '{field}': {error.message}" if field else error.message,
                code=str(error.validator).upper()
            ))

        return ToolValidationResult(valid=len(errors) == 0, errors=errors)

    def createSuccessResult(self, data: Any) -> ToolResult:
        """Create a successful tool result - follows MCP specification."""
        try:
            text = json.dumps(data, indent=2, default=str, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            self.logger.warning(f"Failed to serialize tool result: {e}")
            text = json.dumps({"error": "Failed to serialize result"}, indent=2)

        return ToolResult(
            content=[TextContent(type="text", text=text)],
            isError=False
        )

    def createErrorResult(self, error: ToolError) -> ToolResult:
        """Create an error tool result carrying a JSON error payload."""
        payload = {"error": error.message, "code": error.code.value}
        return ToolResult(
            content=[TextContent(type="text", text=json.dumps(payload, indent=2, ensure_ascii=False))],
            isError=True
        )

    def errorResponse(self, code: MCPErrorCode, message: str, details: Optional[str] = None) -> ToolHandlerResult:
        """Build a failed ToolHandlerResult with its error payload."""
        error = ToolError(code=code, message=message, details=details)
        return ToolHandlerResult(
            success=False,
            error=error,
            result=self.createErrorResult(error)
        )

    async def handleError(self, error: Exception, context: ToolContext) -> ToolHandlerResult:
        """Handle errors during tool execution."""
        self.logger.error(f"{self.name} failed: {error}")
        return self.errorResponse(
            MCPErrorCode.INTERNAL_ERROR,
            f"{self.name} failed: {error}",
            details=type(error).__name__
        )

    def logExecution(self, input: ToolInput, context: ToolContext, success: bool):
        """Log tool execution."""
        self.logger.debug(f"Tool executed: {self.name}", extra={
            'tool': self.name,
            'success': success,
            'requestId': context.requestId
        })


class AssetTool(BaseTool):
    """Base for tools answering queries from the asset registry."""

    def __init__(self, logger, registry: AssetRegistry):
        super().__init__(logger, {'category': ToolCategory.ASSETS})
        self.registry = registry

    @staticmethod
    def categorySchema() -> Dict[str, Any]:
        return {
            "type": "string",
            "enum": AssetCategory.values(),
            "description": "Filter by asset category"
        }

    def checkInput(self, input: ToolInput) -> Optional[ToolHandlerResult]:
        """Schema-validate input; returns an error response or None."""
        validation = self.validateInput(input)
        if validation.valid:
            return None
        return self.errorResponse(
            MCPErrorCode.INVALID_INPUT,
            "; ".join(e.message for e in validation.errors)
        )

    async def execute(self, input: ToolInput, context: ToolContext) -> ToolHandlerResult:
        """Run the query, reporting registry faults as error payloads."""
        try:
            result = await self.run(input)
        except RegistryNotInitializedError as e:
            result = await self.handleError(e, context)
        self.logExecution(input, context, result.success)
        return result

    @abstractmethod
    async def run(self, input: ToolInput) -> ToolHandlerResult:
        """Validate input and query the registry."""
        pass
