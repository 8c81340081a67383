"""
Link liveness checker.

Asks the collaborator to classify candidate URLs as live or dead in one
batched request. Failure is reported for the whole batch, never partially.
"""

import logging
from typing import Dict, Optional, Sequence

import httpx

from ..core.errors import LinkCheckError
from .http import read_json

logger = logging.getLogger(__name__)

CHECK_URLS_PATH = "/api/check-urls"


class LinkLivenessChecker:
    """Batched URL liveness query against the collaborator."""

    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    async def check(self, urls: Sequence[str]) -> Dict[str, Optional[bool]]:
        """Classify each URL.

        Args:
            urls: URLs to check

        Returns:
            Mapping with one entry per input URL: True (live), False (dead)
            or None when the collaborator didn't report on it

        Raises:
            LinkCheckError: If the check is unavailable for any reason
        """
        try:
            response = await self.http.post(CHECK_URLS_PATH, json={"urls": list(urls)})
        except httpx.HTTPError as e:
            raise LinkCheckError(f"URL check failed: {e.__class__.__name__}")

        body = read_json(response)
        if not isinstance(body, dict) or not response.is_success or body.get("success") is not True:
            message = body.get("error") if isinstance(body, dict) else None
            raise LinkCheckError(message or "URL check failed")

        results = body.get("results")
        if not isinstance(results, list):
            raise LinkCheckError("URL check returned no results")

        reported: Dict[str, bool] = {}
        for entry in results:
            if not isinstance(entry, dict):
                raise LinkCheckError("URL check returned a malformed result")
            url = entry.get("url")
            is_live = entry.get("isLive")
            if not isinstance(url, str) or not isinstance(is_live, bool):
                raise LinkCheckError("URL check returned a malformed result")
            reported[url] = is_live

        statuses = {url: reported.get(url) for url in urls}
        logger.debug(
            "URL check: %d live, %d dead, %d unknown",
            sum(1 for v in statuses.values() if v is True),
            sum(1 for v in statuses.values() if v is False),
            sum(1 for v in statuses.values() if v is None),
        )
        return statuses
