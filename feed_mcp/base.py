"""
MCP Tool Base Classes

Provides the shared parameter schema, validation, request building, response
normalization and error envelope for every content feed tool.
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

if TYPE_CHECKING:
    from .client import ContentFeedClient, HttpCallSpec
    from .config import FeedConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolParameter:
    """Definition of a tool parameter."""
    name: str
    type: str
    description: str
    required: bool = True
    default: Any = None
    items: Optional[Dict[str, Any]] = None

    def to_schema(self) -> Dict[str, Any]:
        """JSON-schema property declaration for this parameter."""
        prop: Dict[str, Any] = {
            "type": self.type,
            "description": self.description,
        }
        if self.default is not None:
            prop["default"] = self.default
        if self.items is not None:
            prop["items"] = self.items
        return prop


@dataclass(frozen=True)
class ToolDefinition:
    """Complete definition of an MCP tool."""
    name: str
    description: str
    parameters: Tuple[ToolParameter, ...] = ()
    category: str = "general"

    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {p.name: p.to_schema() for p in self.parameters},
            "required": [p.name for p in self.parameters if p.required],
        }

    def to_openai_schema(self) -> Dict[str, Any]:
        """Render the definition in OpenAI function calling format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.input_schema(),
            },
        }


class MCPToolError(Exception):
    """Base exception for MCP tool errors."""
    error_type = "execution"
    retryable = False

    def __init__(self, message: str, tool_name: str = None, details: Any = None):
        self.message = message
        self.tool_name = tool_name
        self.details = details
        super().__init__(self.message)


class ConfigurationError(MCPToolError):
    """Raised at startup when required settings are missing or invalid."""
    error_type = "configuration"


class ValidationError(MCPToolError):
    """Raised when tool input validation fails."""
    error_type = "validation"


class UnknownToolError(MCPToolError):
    """Raised when an invocation names a tool that is not in the catalog."""
    error_type = "not_found"

    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}", tool_name=tool_name)


class RemoteApiError(MCPToolError):
    """Non-success status or malformed body from the content feed API."""
    error_type = "remote"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Any = None,
        tool_name: str = None,
    ):
        self.status_code = status_code
        super().__init__(message, tool_name=tool_name, details=details)


class TransportError(MCPToolError):
    """Network failure or timeout while reaching the content feed API."""
    error_type = "transport"
    retryable = True


@dataclass
class ToolResponse:
    """
    Uniform envelope produced once per tool invocation.

    On success the payload is handed back as-is; on failure the caller sees
    ``{"status": "error", "message": ..., "details": ...}``.
    """
    status: str
    tool: str
    payload: Any = None
    message: Optional[str] = None
    details: Any = None
    error_type: Optional[str] = None
    retryable: bool = False

    @property
    def success(self) -> bool:
        return self.status == "success"

    @classmethod
    def ok(cls, tool: str, payload: Any) -> "ToolResponse":
        return cls(status="success", tool=tool, payload=payload)

    @classmethod
    def failure(cls, tool: str, error: MCPToolError) -> "ToolResponse":
        return cls(
            status="error",
            tool=tool,
            message=error.message,
            details=error.details,
            error_type=error.error_type,
            retryable=error.retryable,
        )

    def body(self) -> Any:
        if self.success:
            return self.payload
        return {
            "status": "error",
            "message": self.message,
            "details": self.details,
        }

    def to_text(self) -> str:
        return json.dumps(self.body(), indent=2, ensure_ascii=False)


def _validate_items(tool_name: str, param: ToolParameter, values: List[Any]) -> None:
    """Check array items against the parameter's ``items`` object schema."""
    items = param.items or {}
    if items.get("type") != "object":
        return

    properties = items.get("properties", {})
    for index, item in enumerate(values):
        if not isinstance(item, dict):
            raise ValidationError(
                f"{param.name}[{index}] must be an object",
                tool_name=tool_name
            )
        for key in items.get("required", []):
            if item.get(key) is None:
                raise ValidationError(
                    f"{param.name}[{index}] is missing required field '{key}'",
                    tool_name=tool_name
                )
        for key, spec in properties.items():
            if spec.get("type") == "string" and key in item and not isinstance(item[key], str):
                raise ValidationError(
                    f"{param.name}[{index}].{key} must be a string",
                    tool_name=tool_name
                )


class MCPTool(ABC):
    """
    Abstract base class for content feed tools.

    Subclasses declare:
    - name: Tool identifier
    - description: What the tool does (shown to the LLM verbatim)
    - parameters: List of ToolParameter definitions
    - build_request(): validated arguments -> one HTTP call description

    and may override normalize() to reshape the remote body.
    """

    def __init__(self, config: "FeedConfig"):
        self.config = config

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for the tool."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what the tool does."""
        pass

    @property
    def parameters(self) -> List[ToolParameter]:
        """List of parameters the tool accepts."""
        return []

    @property
    def category(self) -> str:
        """Category for grouping tools."""
        return "general"

    def _coerce(self, param: ToolParameter, value: Any) -> Any:
        if param.type == "integer":
            if isinstance(value, bool):
                raise ValidationError(
                    f"Parameter '{param.name}' must be an integer",
                    tool_name=self.name
                )
            if isinstance(value, int):
                return value
            if isinstance(value, float) and value.is_integer():
                return int(value)
            if isinstance(value, str):
                try:
                    return int(value.strip())
                except ValueError:
                    pass
            raise ValidationError(
                f"Parameter '{param.name}' must be an integer",
                tool_name=self.name
            )

        if param.type == "string" and not isinstance(value, str):
            raise ValidationError(
                f"Parameter '{param.name}' must be a string",
                tool_name=self.name
            )

        if param.type == "array":
            if not isinstance(value, list):
                raise ValidationError(
                    f"Parameter '{param.name}' must be an array",
                    tool_name=self.name
                )
            _validate_items(self.name, param, value)

        return value

    def validate(self, **kwargs) -> Dict[str, Any]:
        """
        Validate input parameters.
        Returns validated/normalized parameters; undeclared arguments are dropped.
        Raises ValidationError if validation fails.
        """
        validated = {}

        for param in self.parameters:
            value = kwargs.get(param.name)

            if value is None:
                if param.required:
                    raise ValidationError(
                        f"Missing required parameter: {param.name}",
                        tool_name=self.name
                    )
                value = param.default
            else:
                value = self._coerce(param, value)

            validated[param.name] = value

        return validated

    @abstractmethod
    def build_request(self, **kwargs) -> "HttpCallSpec":
        """Map validated arguments to exactly one outbound HTTP call."""
        pass

    def normalize(self, body: Any, **kwargs) -> Any:
        """Post-process the remote body. Identity unless overridden."""
        return body

    async def execute(self, client: "ContentFeedClient", **kwargs) -> Any:
        spec = self.build_request(**kwargs)
        body = await client.send(spec)
        return self.normalize(body, **kwargs)

    async def run(
        self,
        client: "ContentFeedClient",
        arguments: Optional[Dict[str, Any]] = None,
    ) -> ToolResponse:
        """
        Public entry point: validate and execute.
        Never raises; every failure becomes an error envelope.
        """
        arguments = arguments or {}
        logger.info(f"{self.name} called with: {arguments}")
        try:
            validated = self.validate(**arguments)
            result = await self.execute(client, **validated)
            return ToolResponse.ok(self.name, result)
        except ValidationError as e:
            logger.error(f"Validation error in {self.name}: {e.message}")
            return ToolResponse.failure(self.name, e)
        except MCPToolError as e:
            logger.error(f"Tool error in {self.name}: {e.message}")
            return ToolResponse.failure(self.name, e)
        except Exception as e:
            logger.exception(f"Unexpected error in {self.name}")
            return ToolResponse(
                status="error",
                tool=self.name,
                message=str(e) or "Unknown error occurred",
                error_type="unexpected",
            )

    def to_definition(self) -> ToolDefinition:
        """Convert tool to ToolDefinition for the registry."""
        return ToolDefinition(
            name=self.name,
            description=self.description,
            parameters=tuple(self.parameters),
            category=self.category
        )
