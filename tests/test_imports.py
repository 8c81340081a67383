"""
Smoke test that the public modules import.
"""

import seo_boost
from seo_boost.config import ClientConfig, load_client_config
from seo_boost.sdk import (
    GenerationClient,
    LinkLivenessChecker,
    check_backend_health,
    create_http_client,
    fetch_usage_stats,
)


def test_package_imports():
    assert seo_boost.__version__
    assert ClientConfig().backend_url == "http://localhost:3001"
    assert callable(load_client_config)
    assert all(callable(obj) for obj in (
        GenerationClient, LinkLivenessChecker, check_backend_health, create_http_client, fetch_usage_stats,
    ))
