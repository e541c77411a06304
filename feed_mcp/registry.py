"""
MCP Tool Registry

Single Source of Truth (SSOT) for tool discovery and dispatch.
Holds one instance of every catalog tool, bound to the process FeedConfig
and the shared ContentFeedClient.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Type

from .base import MCPTool, MCPToolError, ToolDefinition, ToolResponse, UnknownToolError
from .client import ContentFeedClient, HttpCallSpec
from .config import FeedConfig
from .tools import CATALOG

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Ordered catalog of tools plus the dispatch entry point."""

    def __init__(
        self,
        config: FeedConfig,
        client: Optional[ContentFeedClient] = None,
        tools: Iterable[Type[MCPTool]] = CATALOG,
    ):
        self.config = config
        self.client = client
        self._tools: Dict[str, MCPTool] = {}

        for tool_cls in tools:
            instance = tool_cls(config)
            if instance.name in self._tools:
                raise ValueError(f"Duplicate tool name: {instance.name}")
            self._tools[instance.name] = instance
            logger.debug(f"Registered tool: {instance.name} ({instance.category})")

        logger.info(f"Tool registry ready. Total tools: {len(self._tools)}")

    def list_tools(self) -> List[ToolDefinition]:
        """All tool definitions, in catalog order."""
        return [tool.to_definition() for tool in self._tools.values()]

    def get_tool(self, name: str) -> Optional[ToolDefinition]:
        """
        Get a specific tool by name.
        Returns None if tool not found.
        """
        tool = self._tools.get(name)
        return tool.to_definition() if tool else None

    def list_tool_names(self) -> List[str]:
        return list(self._tools.keys())

    def get_openai_tools_schema(self) -> List[Dict]:
        """All tools in OpenAI function calling format."""
        return [definition.to_openai_schema() for definition in self.list_tools()]

    def build_request(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> HttpCallSpec:
        """
        Validate arguments and describe the HTTP call a tool would make.

        Raises UnknownToolError or ValidationError.
        """
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownToolError(name)
        validated = tool.validate(**(arguments or {}))
        return tool.build_request(**validated)

    async def execute_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResponse:
        """
        Execute a tool by name with given arguments.
        Always returns an envelope; unknown names never reach the network.
        """
        tool = self._tools.get(name)

        if tool is None:
            error = UnknownToolError(name)
            logger.error(f"Tool error: {error.message}")
            return ToolResponse.failure(name, error)

        if self.client is None:
            return ToolResponse.failure(
                name, MCPToolError("No content feed client configured", tool_name=name)
            )

        return await tool.run(self.client, arguments)
