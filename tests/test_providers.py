"""
Tests for provider reference data.
"""

import pytest

from seo_boost.core.providers import (
    PROVIDER_TABLE,
    AIProvider,
    find_model,
    get_provider,
    resolve_model,
)


class TestProviderTable:
    """Test provider lookups."""

    def test_all_providers_present(self):
        """Test every provider enum value has an entry."""
        assert set(PROVIDER_TABLE.providers) == set(AIProvider)

    def test_default_model_is_selectable(self):
        """Test each provider's default model is one of its models."""
        for info in PROVIDER_TABLE.providers.values():
            assert info.has_model(info.default_model)

    def test_get_provider_by_string(self):
        """Test lookup by string id."""
        info = get_provider("openai")
        assert info.id is AIProvider.OPENAI
        assert info.company == "OpenAI"
        assert info.default_model == "gpt-4o"

    def test_get_provider_by_enum(self):
        """Test lookup by enum value."""
        assert get_provider(AIProvider.GROK).name == "Grok"

    def test_unknown_provider(self):
        """Test unknown provider raises error."""
        with pytest.raises(ValueError, match="Unsupported provider: mistral"):
            get_provider("mistral")

    def test_find_model(self):
        """Test model lookup across providers."""
        found = PROVIDER_TABLE.find_model("gemini-2.0-flash")
        assert found is not None
        info, option = found
        assert info.id is AIProvider.GEMINI
        assert option.rpm_limit == 15
        assert option.rpd_limit == 1500

    def test_find_unknown_model(self):
        """Test unknown model returns None."""
        assert PROVIDER_TABLE.find_model("gpt-2") is None

    def test_module_find_model(self):
        """Test the module-level lookup matches the table's."""
        info, option = find_model("grok-3")
        assert info.id is AIProvider.GROK
        assert option.id == "grok-3"
        assert find_model("gemini-2.0-flash") == PROVIDER_TABLE.find_model("gemini-2.0-flash")
        assert find_model("gpt-2") is None


class TestResolveModel:
    """Test model resolution for accounting."""

    def test_explicit_model_wins(self):
        assert resolve_model("claude", "claude-opus-4-6") == "claude-opus-4-6"

    def test_blank_model_uses_default(self):
        assert resolve_model("claude", "") == "claude-sonnet-4-5-20250514"
        assert resolve_model("claude", "   ") == "claude-sonnet-4-5-20250514"
        assert resolve_model(AIProvider.GROK, None) == "grok-2"
