"""
Process configuration for the content feed tool server.

Settings are read once at startup (environment, optionally seeded from a
.env file) and passed explicitly to the HTTP client and the tools.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from dotenv import load_dotenv

from .base import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://feeds.parsym.com"
DEFAULT_FEED_ID = 292
DEFAULT_REQUEST_TIMEOUT = 30.0


@dataclass(frozen=True)
class FeedConfig:
    """Immutable settings shared by every invocation."""
    api_key: str = field(repr=False)
    secret_key: str = field(repr=False)
    api_base_url: str = DEFAULT_API_BASE_URL
    feed_id: int = DEFAULT_FEED_ID
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    def headers(self) -> Dict[str, str]:
        """Static headers injected into every remote call."""
        return {
            "Content-Type": "application/json",
            "api-key": self.api_key,
            "secret": self.secret_key,
        }


def load_config(env: Optional[Mapping[str, str]] = None) -> FeedConfig:
    """
    Build a FeedConfig from the environment.

    When ``env`` is omitted, a .env file in the working directory (if any) is
    loaded first; variables already set in the process win.
    Raises ConfigurationError if credentials are missing or a value does not parse.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    api_key = (env.get("API_KEY") or "").strip()
    secret_key = (env.get("SECRET_KEY") or "").strip()
    if not api_key or not secret_key:
        raise ConfigurationError(
            "API_KEY and SECRET_KEY must be provided in environment variables"
        )

    base_url = (env.get("API_BASE_URL") or DEFAULT_API_BASE_URL).strip().rstrip("/")

    raw_feed_id = env.get("FEED_ID") or str(DEFAULT_FEED_ID)
    try:
        feed_id = int(raw_feed_id.strip())
    except ValueError:
        raise ConfigurationError(f"FEED_ID must be an integer, got: {raw_feed_id!r}")

    raw_timeout = env.get("REQUEST_TIMEOUT") or str(DEFAULT_REQUEST_TIMEOUT)
    try:
        timeout = float(raw_timeout.strip())
    except ValueError:
        raise ConfigurationError(f"REQUEST_TIMEOUT must be a number, got: {raw_timeout!r}")
    if timeout <= 0:
        raise ConfigurationError(f"REQUEST_TIMEOUT must be positive, got: {timeout}")

    config = FeedConfig(
        api_key=api_key,
        secret_key=secret_key,
        api_base_url=base_url,
        feed_id=feed_id,
        request_timeout=timeout,
    )
    logger.info(f"Configured content feed {config.feed_id} at {config.api_base_url}")
    return config
