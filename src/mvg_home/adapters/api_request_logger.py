"""Logging of outgoing API requests when MVG_HOME_LOG_REQUESTS is enabled."""

import logging
import os
from typing import Any
from urllib.parse import urlencode

logger = logging.getLogger(__name__)

LOG_REQUESTS_ENV = "MVG_HOME_LOG_REQUESTS"


def should_log_requests() -> bool:
    """Check if request logging is enabled via the environment."""
    return os.getenv(LOG_REQUESTS_ENV, "").lower() in ("1", "true", "yes")


def build_request_url(url: str, params: dict[str, Any] | None) -> str:
    """Build the full URL including query parameters, in a stable order."""
    if not params:
        return url
    query = urlencode(sorted(params.items()), safe=":,")
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"


def log_api_request(
    method: str,
    url: str,
    params: dict[str, Any] | None = None,
    proxy: str | None = None,
) -> None:
    """Log an API request if request logging is enabled.

    Args:
        method: HTTP method (GET, POST, etc.).
        url: Request URL.
        params: Query parameters (optional).
        proxy: Proxy the request is routed through, None for direct connections.
    """
    if not should_log_requests():
        return

    via = f" via {proxy}" if proxy else " (direct)"
    logger.info(f"API Request: {method} {build_request_url(url, params)}{via}")
