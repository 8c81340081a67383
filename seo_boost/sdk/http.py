"""
Shared HTTP client for the backend collaborator.
"""

from typing import Any, Optional

import httpx

from ..config.loader import ClientConfig


def create_http_client(
    config: ClientConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Create the async client shared by all collaborator calls.

    Args:
        config: Client configuration (base URL and request timeout)
        transport: Optional transport override, used by tests

    Returns:
        An httpx.AsyncClient bound to the backend URL
    """
    kwargs: dict = {
        "base_url": config.backend_url,
        "headers": {"Content-Type": "application/json"},
        "follow_redirects": True,
    }
    if config.request_timeout is not None:
        kwargs["timeout"] = httpx.Timeout(config.request_timeout, connect=10.0)
    if transport is not None:
        kwargs["transport"] = transport
    return httpx.AsyncClient(**kwargs)


def read_json(response: httpx.Response) -> Any:
    """Decode a JSON body, returning None when it isn't JSON."""
    try:
        return response.json()
    except ValueError:
        return None
