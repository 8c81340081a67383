"""
Generation client for the optimize endpoint.

Issues exactly one request per call; retry policy belongs to the caller.
"""

import logging
from typing import Optional, Sequence

import httpx

from ..core.errors import GenerationError, ResponseParseError
from ..core.models import GenerationRequest, SEOResult
from ..core.providers import AIProvider
from .http import read_json

logger = logging.getLogger(__name__)

OPTIMIZE_PATH = "/api/optimize"


class GenerationClient:
    """Client that asks the collaborator to generate an SEO result.

    The collaborator holds no credentials of its own here: the user's API
    key travels in the request body and is never logged.
    """

    def __init__(self, http: httpx.AsyncClient):
        """Initialize generation client.

        Args:
            http: Shared async HTTP client bound to the backend URL
        """
        self.http = http

    async def generate(
        self,
        provider: AIProvider,
        api_key: str,
        content: str,
        keyword: str,
        urls: Sequence[str],
        model: Optional[str] = None,
    ) -> SEOResult:
        """Generate SEO metadata for the content.

        Args:
            provider: AI provider to use
            api_key: User's provider API key
            content: Article content
            keyword: Primary keyword
            urls: Candidate internal-link URLs
            model: Explicit model id, or None for the provider default

        Returns:
            Parsed SEOResult

        Raises:
            GenerationError: If the collaborator reports failure or is unreachable
            ResponseParseError: If the response doesn't have the expected shape
        """
        request = GenerationRequest(
            content=content,
            keyword=keyword,
            urls=tuple(urls),
            provider=AIProvider(provider),
            api_key=api_key,
            model=model or None,
        )
        return await self.send(request)

    async def send(self, request: GenerationRequest) -> SEOResult:
        """Send a prepared request and parse the result."""
        logger.info(
            "Requesting generation from %s (model=%s, urls=%d)",
            request.provider.value, request.model or "default", len(request.urls),
        )
        try:
            response = await self.http.post(OPTIMIZE_PATH, json=request.to_payload())
        except httpx.HTTPError as e:
            raise GenerationError(f"Could not reach the server: {e.__class__.__name__}")

        body = read_json(response)
        if not isinstance(body, dict):
            if not response.is_success:
                raise GenerationError(f"Server error ({response.status_code})", response.status_code)
            raise ResponseParseError("Server returned an unreadable response", response.status_code)

        if not response.is_success or body.get("success") is not True:
            message = body.get("error")
            if not isinstance(message, str) or not message:
                message = f"Server error ({response.status_code})"
            raise GenerationError(message, response.status_code)

        result = SEOResult.from_payload(body.get("data"))
        logger.info("Generation succeeded (tokens=%s)", result.tokens_used)
        return result
