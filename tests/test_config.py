"""
Unit tests for configuration loading and validation.

Tests strict validation, defaults and environment overrides.
"""

import os
import tempfile

import pytest
import yaml

from seo_boost.config.loader import (
    BACKEND_URL_ENV,
    DEFAULT_CONFIG,
    ClientConfig,
    load_client_config,
)


class TestConfigLoading:
    """Test configuration loading and validation."""

    def setup_method(self):
        """Set up test environment."""
        self.temp_dir = tempfile.mkdtemp()

    def teardown_method(self):
        """Clean up test environment."""
        import shutil
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _write_config(self, config_data, filename: str = "config.yaml") -> str:
        """Write configuration data to temporary file."""
        config_path = os.path.join(self.temp_dir, filename)
        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(config_data, f)
        return config_path

    def test_defaults_without_file(self, monkeypatch):
        """Test defaults are used when no file is given."""
        monkeypatch.delenv(BACKEND_URL_ENV, raising=False)

        config = load_client_config()

        assert config == DEFAULT_CONFIG
        assert config.backend_url == "http://localhost:3001"
        assert config.health_poll_interval == 30.0
        assert config.health_timeout == 4.0
        assert config.min_content_words == 50

    def test_valid_config_loads_correctly(self, monkeypatch):
        """Test that a valid configuration loads correctly."""
        monkeypatch.delenv(BACKEND_URL_ENV, raising=False)
        path = self._write_config({
            "backend_url": "https://seo.example.com/",
            "health_poll_interval": 10,
            "health_timeout": 2.5,
            "request_timeout": None,
            "min_content_words": 20,
            "usage_stats_path": "/api/stats",
        })

        config = load_client_config(path)

        assert config.backend_url == "https://seo.example.com"
        assert config.health_poll_interval == 10.0
        assert config.health_timeout == 2.5
        assert config.request_timeout is None
        assert config.min_content_words == 20
        assert config.usage_stats_path == "/api/stats"

    def test_partial_config_keeps_defaults(self, monkeypatch):
        """Test that unspecified keys keep their defaults."""
        monkeypatch.delenv(BACKEND_URL_ENV, raising=False)
        path = self._write_config({"min_content_words": 10})

        config = load_client_config(path)

        assert config.min_content_words == 10
        assert config.backend_url == DEFAULT_CONFIG.backend_url

    def test_env_overrides_file(self, monkeypatch):
        """Test the environment variable wins over the file."""
        monkeypatch.setenv(BACKEND_URL_ENV, "https://env.example.com/")
        path = self._write_config({"backend_url": "https://file.example.com"})

        config = load_client_config(path)

        assert config.backend_url == "https://env.example.com"

    def test_missing_file_fails(self):
        """Test missing config file raises error."""
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_client_config(os.path.join(self.temp_dir, "missing.yaml"))

    def test_empty_file_fails(self):
        """Test empty config file raises error."""
        path = os.path.join(self.temp_dir, "empty.yaml")
        open(path, 'w').close()

        with pytest.raises(ValueError, match="Configuration file is empty"):
            load_client_config(path)

    def test_invalid_yaml_fails(self):
        """Test invalid YAML raises a YAML error."""
        path = os.path.join(self.temp_dir, "bad.yaml")
        with open(path, 'w', encoding='utf-8') as f:
            f.write("backend_url: [unclosed\n")

        with pytest.raises(yaml.YAMLError):
            load_client_config(path)

    def test_unknown_keys_fail(self):
        """Test unknown keys are rejected."""
        path = self._write_config({"api_key": "sk-secret"})

        with pytest.raises(ValueError, match="Unknown configuration keys"):
            load_client_config(path)

    def test_non_mapping_fails(self):
        """Test a YAML list is rejected."""
        path = self._write_config(["backend_url"])

        with pytest.raises(ValueError, match="must contain a mapping"):
            load_client_config(path)

    def test_invalid_values_fail(self, monkeypatch):
        """Test invalid values are rejected."""
        monkeypatch.delenv(BACKEND_URL_ENV, raising=False)
        cases = [
            ({"backend_url": "ftp://example.com"}, "backend_url must be an http"),
            ({"backend_url": 42}, "'backend_url' must be a string"),
            ({"health_timeout": 0}, "health_timeout must be > 0"),
            ({"health_poll_interval": "soon"}, "must be a number of seconds"),
            ({"min_content_words": 1.5}, "must be an integer"),
            ({"min_content_words": True}, "must be an integer"),
            ({"usage_stats_path": "api/stats"}, "must start with '/'"),
        ]
        for data, message in cases:
            path = self._write_config(data)
            with pytest.raises(ValueError, match=message):
                load_client_config(path)


class TestClientConfig:
    """Test ClientConfig validation."""

    def test_config_is_immutable(self):
        """Test config cannot be modified."""
        config = ClientConfig()
        with pytest.raises(AttributeError):
            config.backend_url = "http://other"

    def test_negative_request_timeout_fails(self):
        """Test request_timeout must be positive."""
        with pytest.raises(ValueError, match="request_timeout must be > 0"):
            ClientConfig(request_timeout=-1)

    def test_negative_min_words_fails(self):
        """Test min_content_words must not be negative."""
        with pytest.raises(ValueError, match="min_content_words must be >= 0"):
            ClientConfig(min_content_words=-1)
