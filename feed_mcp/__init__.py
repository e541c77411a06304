"""
Real estate content feed MCP layer.

Translates tool invocations into calls against the Content Feed API.
Tools are listed in feed_mcp.tools.CATALOG and dispatched via registry.py
"""

from .base import MCPTool, ToolDefinition, ToolParameter, ToolResponse
from .config import FeedConfig, load_config
from .registry import ToolRegistry

__all__ = [
    "FeedConfig",
    "MCPTool",
    "ToolDefinition",
    "ToolParameter",
    "ToolRegistry",
    "ToolResponse",
    "load_config",
]
