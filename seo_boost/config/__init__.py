"""
Configuration for SEO Boost.
"""

from .loader import ClientConfig, DEFAULT_CONFIG, load_client_config

__all__ = ["ClientConfig", "DEFAULT_CONFIG", "load_client_config"]
