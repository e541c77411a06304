"""
Content Feed API client.

Executes the HttpCallSpec produced by a tool against the remote API and
classifies failures into RemoteApiError / TransportError.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from .base import RemoteApiError, TransportError
from .config import FeedConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpCallSpec:
    """Description of one outbound request: method, path, query and JSON body."""
    method: str
    path: str
    params: Optional[Dict[str, Any]] = None
    json: Any = None


def _error_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class ContentFeedClient:
    """Async HTTP client bound to one FeedConfig."""

    def __init__(
        self,
        config: FeedConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self._client = httpx.AsyncClient(
            base_url=config.api_base_url,
            headers=config.headers(),
            timeout=config.request_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "ContentFeedClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def send(self, spec: HttpCallSpec) -> Any:
        """
        Perform the call and return the decoded JSON body.

        Raises:
            TransportError: the API could not be reached or timed out
            RemoteApiError: non-2xx status or a body that is not JSON
        """
        logger.debug(f"{spec.method} {spec.path} params={spec.params} json={spec.json}")
        try:
            response = await self._client.request(
                spec.method,
                spec.path,
                params=spec.params,
                json=spec.json,
            )
        except httpx.TimeoutException as e:
            raise TransportError(
                f"Request to {spec.path} timed out after {self.config.request_timeout}s"
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(str(e) or e.__class__.__name__) from e

        if not response.is_success:
            body = _error_body(response)
            message = body.get("message") if isinstance(body, dict) else None
            raise RemoteApiError(
                str(message) if message else f"Request failed with status code {response.status_code}",
                status_code=response.status_code,
                details=body,
            )

        try:
            return response.json()
        except ValueError:
            raise RemoteApiError(
                "Malformed response body from content feed API",
                status_code=response.status_code,
                details=response.text or None,
            )
