"""
Configuration management and loading.

Handles client settings from an optional YAML file and environment variables.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import yaml


BACKEND_URL_ENV = "SEO_BOOST_BACKEND_URL"


@dataclass(frozen=True)
class ClientConfig:
    """Settings for talking to the backend collaborator.

    The API key is deliberately not part of this object: it lives only in
    session memory and is never read from or written to a file.
    """
    backend_url: str = "http://localhost:3001"
    health_poll_interval: float = 30.0
    health_timeout: float = 4.0
    request_timeout: Optional[float] = 120.0
    min_content_words: int = 50
    usage_stats_path: str = "/api/usage-stats"

    def __post_init__(self):
        """Validate configuration values."""
        parsed = urlparse(self.backend_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"backend_url must be an http(s) URL, got: {self.backend_url!r}")
        if self.health_poll_interval <= 0:
            raise ValueError("health_poll_interval must be > 0")
        if self.health_timeout <= 0:
            raise ValueError("health_timeout must be > 0")
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise ValueError("request_timeout must be > 0 or null")
        if self.min_content_words < 0:
            raise ValueError("min_content_words must be >= 0")
        if not self.usage_stats_path.startswith("/"):
            raise ValueError("usage_stats_path must start with '/'")


DEFAULT_CONFIG = ClientConfig()

_ALLOWED_KEYS = {
    'backend_url',
    'health_poll_interval',
    'health_timeout',
    'request_timeout',
    'min_content_words',
    'usage_stats_path',
}


def load_client_config(path: Optional[str] = None) -> ClientConfig:
    """Load and validate client configuration.

    Values come from the defaults, then the YAML file (if given), then the
    ``SEO_BOOST_BACKEND_URL`` environment variable.

    Args:
        path: Optional path to a YAML configuration file

    Returns:
        Validated ClientConfig object

    Raises:
        FileNotFoundError: If the config file doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If configuration is invalid
    """
    config = DEFAULT_CONFIG

    if path is not None:
        config = replace(config, **_read_config_file(path))

    env_url = os.environ.get(BACKEND_URL_ENV)
    if env_url:
        config = replace(config, backend_url=env_url.rstrip("/"))

    return config


def _read_config_file(path: str) -> Dict[str, Any]:
    """Read the YAML file and return validated overrides.

    Args:
        path: Path to YAML configuration file

    Returns:
        Mapping of ClientConfig field names to values
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in config file {path}: {e}")

    if not raw_config:
        raise ValueError("Configuration file is empty")
    if not isinstance(raw_config, dict):
        raise ValueError("Configuration file must contain a mapping")

    unknown_keys = set(raw_config.keys()) - _ALLOWED_KEYS
    if unknown_keys:
        raise ValueError(f"Unknown configuration keys: {unknown_keys}")

    overrides: Dict[str, Any] = {}

    if 'backend_url' in raw_config:
        url = raw_config['backend_url']
        if not isinstance(url, str):
            raise ValueError("'backend_url' must be a string")
        overrides['backend_url'] = url.rstrip("/")

    for key in ('health_poll_interval', 'health_timeout'):
        if key in raw_config:
            overrides[key] = _parse_seconds(raw_config[key], key)

    if 'request_timeout' in raw_config:
        value = raw_config['request_timeout']
        overrides['request_timeout'] = None if value is None else _parse_seconds(value, 'request_timeout')

    if 'min_content_words' in raw_config:
        words = raw_config['min_content_words']
        if isinstance(words, bool) or not isinstance(words, int):
            raise ValueError("'min_content_words' must be an integer")
        overrides['min_content_words'] = words

    if 'usage_stats_path' in raw_config:
        stats_path = raw_config['usage_stats_path']
        if not isinstance(stats_path, str):
            raise ValueError("'usage_stats_path' must be a string")
        overrides['usage_stats_path'] = stats_path

    return overrides


def _parse_seconds(value: Any, key: str) -> float:
    """Validate a duration given in seconds."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"'{key}' must be a number of seconds")
    return float(value)
