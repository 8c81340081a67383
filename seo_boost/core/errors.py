"""
Error taxonomy for the generation flow.

Precondition and generation errors halt a run; link-check and usage-stats
errors are advisory and are converted to fallbacks where they occur.
"""

from typing import Optional


class SeoBoostError(Exception):
    """Base class for all SEO Boost errors."""


class PreconditionError(SeoBoostError):
    """Raised when inputs or settings are missing before any network call."""

    CONTENT_TOO_SHORT = "content_too_short"
    KEYWORD_REQUIRED = "keyword_required"
    SETTINGS_REQUIRED = "settings_required"
    URLS_REQUIRED = "urls_required"

    def __init__(self, kind: str, message: str):
        super().__init__(message)
        self.kind = kind

    @property
    def requires_settings(self) -> bool:
        """Whether the settings surface should be brought into focus."""
        return self.kind in (self.SETTINGS_REQUIRED, self.URLS_REQUIRED)


class GenerationError(SeoBoostError):
    """Raised when the generation collaborator fails or reports an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ResponseParseError(GenerationError):
    """Raised when a collaborator response doesn't have the expected shape."""


class LinkCheckError(SeoBoostError):
    """Raised when the liveness check is unavailable as a whole."""


class UsageStatsError(SeoBoostError):
    """Raised when the historical usage snapshot can't be fetched."""
