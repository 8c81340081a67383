"""
Provider reference data.

Fixed table of supported AI providers and their selectable models.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class AIProvider(str, Enum):
    """Supported third-party LLM vendors."""
    CLAUDE = "claude"
    OPENAI = "openai"
    GEMINI = "gemini"
    GROK = "grok"


@dataclass(frozen=True)
class ModelOption:
    """A selectable model and its published rate limits."""
    id: str
    label: str
    tier: Optional[str] = None
    rpm_limit: Optional[int] = None  # Requests per minute
    rpd_limit: Optional[int] = None  # Requests per day


@dataclass(frozen=True)
class ProviderInfo:
    """Static description of a provider.

    ``placeholder`` is a display-only hint for the credential format; it is
    never used to validate keys.
    """
    id: AIProvider
    name: str
    company: str
    default_model: str
    models: Tuple[ModelOption, ...]
    placeholder: str
    rate_limit_url: Optional[str] = None

    def has_model(self, model_id: str) -> bool:
        """Check whether a model id belongs to this provider."""
        return any(m.id == model_id for m in self.models)


@dataclass(frozen=True)
class ProviderTable:
    """Fixed provider table for supported vendors."""
    providers: Dict[AIProvider, ProviderInfo]

    def get_provider(self, provider) -> ProviderInfo:
        """Get reference data for a provider.

        Args:
            provider: AIProvider or its string id

        Returns:
            ProviderInfo for the provider

        Raises:
            ValueError: If provider is not supported
        """
        try:
            key = AIProvider(provider)
        except ValueError:
            raise ValueError(f"Unsupported provider: {provider}")
        return self.providers[key]

    def find_model(self, model_id: str) -> Optional[Tuple[ProviderInfo, ModelOption]]:
        """Look up a model id across all providers."""
        for info in self.providers.values():
            for option in info.models:
                if option.id == model_id:
                    return info, option
        return None


# Fixed provider table - no dynamic fetching
PROVIDER_TABLE = ProviderTable({
    AIProvider.CLAUDE: ProviderInfo(
        id=AIProvider.CLAUDE,
        name="Claude",
        company="Anthropic",
        default_model="claude-sonnet-4-5-20250514",
        models=(
            ModelOption("claude-sonnet-4-5-20250514", "Claude Sonnet 4.5", "Sonnet", 50, 1000),
            ModelOption("claude-opus-4-6", "Claude Opus 4.6", "Opus", 5, 100),
            ModelOption("claude-haiku-3-5-20241022", "Claude Haiku 3.5", "Haiku", 50, 2000),
        ),
        placeholder="sk-ant-...",
        rate_limit_url="https://docs.anthropic.com/en/api/rate-limits",
    ),
    AIProvider.OPENAI: ProviderInfo(
        id=AIProvider.OPENAI,
        name="OpenAI",
        company="OpenAI",
        default_model="gpt-4o",
        models=(
            ModelOption("gpt-4o", "GPT-4o", "Tier 1", 500, 10000),
            ModelOption("gpt-4o-mini", "GPT-4o Mini", "Tier 1", 500, 10000),
            ModelOption("gpt-4-turbo", "GPT-4 Turbo", "Tier 1", 500, 10000),
            ModelOption("o3-mini", "o3-mini", "Tier 1", 500, 10000),
        ),
        placeholder="sk-...",
        rate_limit_url="https://platform.openai.com/docs/guides/rate-limits",
    ),
    AIProvider.GEMINI: ProviderInfo(
        id=AIProvider.GEMINI,
        name="Gemini",
        company="Google",
        default_model="gemini-2.0-flash",
        models=(
            ModelOption("gemini-2.0-flash", "Gemini 2.0 Flash", "Free", 15, 1500),
            ModelOption("gemini-2.5-pro-preview-05-06", "Gemini 2.5 Pro", "Pay-as-you-go", 5, 25),
            ModelOption("gemini-2.5-flash-preview-05-20", "Gemini 2.5 Flash", "Pay-as-you-go", 10, 500),
        ),
        placeholder="AIza...",
        rate_limit_url="https://ai.google.dev/gemini-api/docs/rate-limits",
    ),
    AIProvider.GROK: ProviderInfo(
        id=AIProvider.GROK,
        name="Grok",
        company="xAI",
        default_model="grok-2",
        models=(
            ModelOption("grok-2", "Grok 2", "Standard", 60, 1440),
            ModelOption("grok-3", "Grok 3", "Standard", 60, 1440),
            ModelOption("grok-3-mini", "Grok 3 Mini", "Standard", 60, 1440),
        ),
        placeholder="xai-...",
        rate_limit_url="https://docs.x.ai/docs/rate-limits",
    ),
})


def get_provider(provider) -> ProviderInfo:
    """Get reference data for a provider from the fixed table."""
    return PROVIDER_TABLE.get_provider(provider)


def find_model(model_id: str) -> Optional[Tuple[ProviderInfo, ModelOption]]:
    """Find the provider and option for a model id, or None if unknown."""
    return PROVIDER_TABLE.find_model(model_id)


def resolve_model(provider, model: Optional[str] = None) -> str:
    """Return the explicit model if set, else the provider's default.

    Used for local display and usage accounting only; the wire payload
    never carries a model the user didn't choose.
    """
    if model and model.strip():
        return model.strip()
    return get_provider(provider).default_model
