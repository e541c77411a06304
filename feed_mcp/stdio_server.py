#!/usr/bin/env python3
"""
MCP stdio server for the real estate content feed.

Speaks the Model Context Protocol over stdin/stdout. Logs go to stderr so
they never corrupt the protocol stream.
"""

import asyncio
import logging
import os
import sys

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from .base import ConfigurationError, ToolDefinition, ToolResponse
from .client import ContentFeedClient
from .config import FeedConfig, load_config
from .registry import ToolRegistry

logger = logging.getLogger(__name__)

SERVER_NAME = "real-estate-feed-mcp"
SERVER_VERSION = "1.0.0"


def to_mcp_tool(definition: ToolDefinition) -> Tool:
    return Tool(
        name=definition.name,
        description=definition.description,
        inputSchema=definition.input_schema(),
    )


def to_text_content(response: ToolResponse) -> list[TextContent]:
    return [TextContent(type="text", text=response.to_text())]


def create_server(registry: ToolRegistry) -> Server:
    """Wire the registry into an MCP Server instance."""
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List the content feed tools."""
        return [to_mcp_tool(d) for d in registry.list_tools()]

    # MCPTool.validate is the only argument check, so bad input still
    # comes back as an error envelope.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict) -> list[TextContent]:
        """Handle tool calls. Failures come back as error envelopes, not faults."""
        response = await registry.execute_tool(name, arguments)
        return to_text_content(response)

    return server


async def serve(config: FeedConfig) -> None:
    """Run the MCP server until stdin closes."""
    async with ContentFeedClient(config) as client:
        registry = ToolRegistry(config, client)
        server = create_server(registry)
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options()
            )


def main() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    try:
        config = load_config()
    except ConfigurationError as e:
        logger.error(e.message)
        sys.exit(1)

    asyncio.run(serve(config))


if __name__ == "__main__":
    main()
