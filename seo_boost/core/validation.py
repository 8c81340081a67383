"""
Precondition checks run before any network call.
"""

from typing import Optional, Sequence

from .errors import PreconditionError
from .providers import AIProvider


def count_words(text: str) -> int:
    """Count whitespace-separated words."""
    return len(text.split())


def validate_inputs(content: str, keyword: str, min_words: int) -> None:
    """Check the article content and primary keyword.

    Raises:
        PreconditionError: If content is too short or the keyword is blank
    """
    if count_words(content) < min_words:
        raise PreconditionError(
            PreconditionError.CONTENT_TOO_SHORT,
            f"Please provide at least {min_words} words for meaningful SEO analysis.",
        )
    if not keyword.strip():
        raise PreconditionError(
            PreconditionError.KEYWORD_REQUIRED,
            "Please enter a primary keyword.",
        )


def validate_settings(
    provider: Optional[AIProvider],
    api_key: str,
    urls: Sequence[str],
) -> None:
    """Check the session settings needed to dispatch a request.

    Raises:
        PreconditionError: If provider, API key or URL list is missing
    """
    if provider is None or not api_key.strip():
        raise PreconditionError(
            PreconditionError.SETTINGS_REQUIRED,
            "Please configure your AI provider and API key in Settings first.",
        )
    if not urls:
        raise PreconditionError(
            PreconditionError.URLS_REQUIRED,
            "Please upload a URL list in Settings first.",
        )
