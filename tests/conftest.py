"""
Shared fixtures: a FeedConfig and an in-process fake of the Content Feed API.
"""

import json
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest

from feed_mcp.client import ContentFeedClient
from feed_mcp.config import FeedConfig
from feed_mcp.registry import ToolRegistry


class FakeFeedApi:
    """Records every request and answers from canned (method, path) responses."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._routes: Dict[Tuple[str, str], Dict[str, Any]] = {}

    def respond(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        json_body: Any = None,
        text: Optional[str] = None,
        exc: Optional[Exception] = None,
    ) -> None:
        self._routes[(method, path)] = {
            "status_code": status_code,
            "json_body": json_body,
            "text": text,
            "exc": exc,
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": f"No route for {request.url.path}"})
        if route["exc"] is not None:
            raise route["exc"]
        if route["text"] is not None:
            return httpx.Response(route["status_code"], text=route["text"])
        return httpx.Response(route["status_code"], json=route["json_body"])

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def last_json(self) -> Any:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def config() -> FeedConfig:
    return FeedConfig(
        api_key="test-api-key",
        secret_key="test-secret",
        api_base_url="https://feeds.example.test",
        feed_id=292,
        request_timeout=5.0,
    )


@pytest.fixture
def feed_api() -> FakeFeedApi:
    return FakeFeedApi()


@pytest.fixture
def client(config, feed_api) -> ContentFeedClient:
    return ContentFeedClient(config, transport=feed_api.transport)


@pytest.fixture
def registry(config, client) -> ToolRegistry:
    return ToolRegistry(config, client)
