"""
Data models for the generation flow.

Defines the boundary types exchanged with the backend collaborator and the
append-only usage records kept for the session. Remote JSON is validated
and converted here; nothing untyped leaves this module.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from .errors import ResponseParseError
from .providers import AIProvider


META_TITLE_LIMIT = 55
META_DESCRIPTION_LIMIT = 145


@dataclass(frozen=True)
class InternalLink:
    """Suggested internal link with its anchor text."""
    anchor_text: str
    url: str
    is_live: bool = False

    @classmethod
    def from_payload(cls, data: Any) -> "InternalLink":
        if not isinstance(data, dict):
            raise ResponseParseError("internal link must be an object")
        # Liveness is reapplied after generation, so a bad flag is not fatal
        is_live = data.get("isLive")
        if not isinstance(is_live, bool):
            is_live = False
        return cls(
            anchor_text=_require_str(data, "anchorText"),
            url=_require_str(data, "url"),
            is_live=is_live,
        )


@dataclass(frozen=True)
class SEOResult:
    """The SEO artifact produced by one generation.

    Meta title and description length targets are advisory and are not
    enforced.
    """
    h2: str
    h3: str
    paragraph1: str
    paragraph2: str
    meta_title: str
    meta_description: str
    internal_links: Tuple[InternalLink, ...]
    placement_recommendation: str
    tokens_used: Optional[int] = None

    @classmethod
    def from_payload(cls, data: Any) -> "SEOResult":
        """Build a result from the ``data`` object of an optimize response.

        Raises:
            ResponseParseError: If a required field is missing or mistyped
        """
        if not isinstance(data, dict):
            raise ResponseParseError("response 'data' must be an object")

        links = data.get("internalLinks")
        if not isinstance(links, list):
            raise ResponseParseError("response field 'internalLinks' must be a list")

        tokens = _optional_count(data.get("tokensUsed"))

        return cls(
            h2=_require_str(data, "h2"),
            h3=_require_str(data, "h3"),
            paragraph1=_require_str(data, "paragraph1"),
            paragraph2=_require_str(data, "paragraph2"),
            meta_title=_require_str(data, "metaTitle"),
            meta_description=_require_str(data, "metaDescription"),
            internal_links=tuple(InternalLink.from_payload(link) for link in links),
            placement_recommendation=_require_str(data, "placementRecommendation"),
            tokens_used=tokens,
        )

    def with_all_links_live(self) -> "SEOResult":
        """Return a copy whose internal links are all marked live."""
        return replace(
            self,
            internal_links=tuple(replace(link, is_live=True) for link in self.internal_links),
        )

    @property
    def meta_title_within_limit(self) -> bool:
        return len(self.meta_title) <= META_TITLE_LIMIT

    @property
    def meta_description_within_limit(self) -> bool:
        return len(self.meta_description) <= META_DESCRIPTION_LIMIT


@dataclass(frozen=True)
class GenerationRequest:
    """One generation attempt, built only after preconditions pass."""
    content: str
    keyword: str
    urls: Tuple[str, ...]
    provider: AIProvider
    api_key: str = field(repr=False)
    model: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the ``/api/optimize`` request body.

        ``model`` is only included when explicitly set; the server
        resolves the provider default otherwise.
        """
        payload: Dict[str, Any] = {
            "content": self.content,
            "primaryKeyword": self.keyword,
            "urls": list(self.urls),
            "provider": self.provider.value,
            "apiKey": self.api_key,
        }
        if self.model:
            payload["model"] = self.model
        return payload


@dataclass(frozen=True)
class SessionUsageRecord:
    """Immutable record of one successful generation in this session.

    Append-only; never persisted by the client.
    """
    provider: AIProvider
    model: str
    tokens_used: int
    timestamp: datetime


@dataclass(frozen=True)
class ModelUsage:
    """Historical usage for one model."""
    model: str
    requests: int
    total_tokens: int


@dataclass(frozen=True)
class ProviderUsage:
    """Historical usage for one provider, broken down by model."""
    provider: str
    requests: int
    total_tokens: int
    models: Tuple[ModelUsage, ...] = ()


@dataclass(frozen=True)
class UsageStats:
    """Read-only snapshot of historical usage from the collaborator."""
    total_requests: int
    total_tokens: int
    providers: Tuple[ProviderUsage, ...] = ()

    def get_provider(self, provider: str) -> Optional[ProviderUsage]:
        for usage in self.providers:
            if usage.provider == provider:
                return usage
        return None

    @classmethod
    def from_payload(cls, data: Any) -> "UsageStats":
        """Build a snapshot from the usage-stats response body.

        Raises:
            ResponseParseError: If the body doesn't have the expected shape
        """
        if not isinstance(data, dict):
            raise ResponseParseError("usage stats must be an object")

        providers: List[ProviderUsage] = []
        for entry in _require_list(data, "providers"):
            if not isinstance(entry, dict):
                raise ResponseParseError("provider usage must be an object")
            models = []
            for model_entry in _require_list(entry, "models"):
                if not isinstance(model_entry, dict):
                    raise ResponseParseError("model usage must be an object")
                models.append(ModelUsage(
                    model=_require_str(model_entry, "model"),
                    requests=_require_count(model_entry, "requests"),
                    total_tokens=_require_count(model_entry, "totalTokens"),
                ))
            providers.append(ProviderUsage(
                provider=_require_str(entry, "provider"),
                requests=_require_count(entry, "requests"),
                total_tokens=_require_count(entry, "totalTokens"),
                models=tuple(models),
            ))

        return cls(
            total_requests=_require_count(data, "totalRequests"),
            total_tokens=_require_count(data, "totalTokens"),
            providers=tuple(providers),
        )


def _require_str(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ResponseParseError(f"response field '{key}' must be a string")
    return value


def _require_list(data: Dict[str, Any], key: str) -> list:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise ResponseParseError(f"response field '{key}' must be a list")
    return value


def _require_count(data: Dict[str, Any], key: str) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ResponseParseError(f"response field '{key}' must be a non-negative integer")
    return value


def _optional_count(value: Any) -> Optional[int]:
    """Read an optional token count; integral floats are accepted, anything else is absent."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or value < 0:
        return None
    return value
