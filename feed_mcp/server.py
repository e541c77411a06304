#!/usr/bin/env python3
"""
HTTP API server that exposes the content feed tools.

Same registry and envelopes as the stdio server, for clients that prefer
plain HTTP over the MCP transport.
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import httpx
import uvicorn
from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel

from .client import ContentFeedClient
from .config import FeedConfig, load_config
from .registry import ToolRegistry

logger = logging.getLogger(__name__)

SERVICE_NAME = "Real Estate Content Feed MCP Server"
SERVICE_VERSION = "1.0.0"


class ToolRequest(BaseModel):
    """Request body for tool execution."""

    arguments: Dict[str, Any] = {}


class ToolResponseModel(BaseModel):
    """Envelope returned from tool execution."""

    status: str
    tool: str
    result: Any = None
    message: Optional[str] = None
    details: Any = None
    error_type: Optional[str] = None
    retryable: bool = False


def _definition_to_dict(definition) -> Dict[str, Any]:
    return {
        "name": definition.name,
        "description": definition.description,
        "category": definition.category,
        "input_schema": definition.input_schema(),
    }


def create_app(
    config: Optional[FeedConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the FastAPI app.

    Config is loaded from the environment at startup unless given; the
    transport override exists for tests.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        feed_config = config or load_config()
        client = ContentFeedClient(feed_config, transport=transport)
        registry = ToolRegistry(feed_config, client)
        app.state.registry = registry

        logger.info(f"MCP Server starting with {len(registry.list_tool_names())} tools")
        for name in registry.list_tool_names():
            logger.info(f"  - {name}")

        yield

        await client.aclose()
        logger.info("MCP Server shutting down")

    app = FastAPI(
        title=SERVICE_NAME,
        description="Model Context Protocol tools for the real estate content feed",
        version=SERVICE_VERSION,
        lifespan=lifespan,
    )

    def get_registry(request: Request) -> ToolRegistry:
        return request.app.state.registry

    # ============== API Endpoints ==============

    @app.get("/")
    async def root(request: Request):
        return {
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "tools_count": len(get_registry(request).list_tool_names()),
            "endpoints": {
                "list_tools": "/tools",
                "tool_schema": "/tools/schema",
                "execute": "/tools/{tool_name}/execute",
                "health": "/health",
            },
        }

    @app.get("/health")
    async def health(request: Request):
        return {"status": "healthy", "tools_loaded": len(get_registry(request).list_tool_names())}

    @app.get("/tools")
    async def list_tools(request: Request):
        definitions = get_registry(request).list_tools()
        return {
            "total": len(definitions),
            "tools": [_definition_to_dict(d) for d in definitions],
        }

    @app.get("/tools/schema")
    async def get_tools_schema(request: Request):
        return {"tools": get_registry(request).get_openai_tools_schema()}

    @app.get("/tools/{tool_name}")
    async def get_tool_info(tool_name: str, request: Request):
        definition = get_registry(request).get_tool(tool_name)
        if definition is None:
            raise HTTPException(status_code=404, detail=f"Tool not found: {tool_name}")
        return _definition_to_dict(definition)

    @app.post("/tools/{tool_name}/execute", response_model=ToolResponseModel)
    async def execute_tool_endpoint(tool_name: str, body: ToolRequest, request: Request):
        response = await get_registry(request).execute_tool(tool_name, body.arguments)
        return ToolResponseModel(
            status=response.status,
            tool=response.tool,
            result=response.payload,
            message=response.message,
            details=response.details,
            error_type=response.error_type,
            retryable=response.retryable,
        )

    return app


app = create_app()


def main() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        "feed_mcp.server:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )


if __name__ == "__main__":
    main()
