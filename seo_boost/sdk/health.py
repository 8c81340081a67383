"""
Backend health probe.
"""

import logging

import httpx

logger = logging.getLogger(__name__)

HEALTH_PATH = "/api/health"


async def check_backend_health(http: httpx.AsyncClient) -> bool:
    """Return True when the health endpoint answers with any 2xx.

    Transport errors and non-2xx responses count as unhealthy; this
    function never raises for network failures.
    """
    try:
        response = await http.get(HEALTH_PATH)
    except httpx.HTTPError as e:
        logger.debug("Health check failed: %s", e.__class__.__name__)
        return False
    return response.is_success
