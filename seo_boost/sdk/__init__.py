"""
SDK for SEO Boost.

Provides async clients for the backend collaborator endpoints.
"""

from .generation_client import GenerationClient
from .health import check_backend_health
from .http import create_http_client
from .link_checker import LinkLivenessChecker
from .usage_stats import fetch_usage_stats

__all__ = [
    "GenerationClient",
    "LinkLivenessChecker",
    "check_backend_health",
    "create_http_client",
    "fetch_usage_stats",
]
