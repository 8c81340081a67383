"""
Historical usage stats reader.
"""

import httpx

from ..core.errors import ResponseParseError, UsageStatsError
from ..core.models import UsageStats
from .http import read_json


async def fetch_usage_stats(http: httpx.AsyncClient, path: str) -> UsageStats:
    """Fetch the historical usage snapshot.

    Args:
        http: Shared async HTTP client
        path: Route of the usage-stats endpoint

    Returns:
        Parsed UsageStats snapshot

    Raises:
        UsageStatsError: If the request fails or the body is malformed
    """
    try:
        response = await http.get(path)
    except httpx.HTTPError as e:
        raise UsageStatsError(f"Usage stats request failed: {e.__class__.__name__}")

    if not response.is_success:
        raise UsageStatsError(f"Usage stats request failed ({response.status_code})")

    body = read_json(response)
    try:
        return UsageStats.from_payload(body)
    except ResponseParseError as e:
        raise UsageStatsError(f"Malformed usage stats: {e}")
