"""Provider registry: identifier to wire endpoint, auth, and dialect.

Adding a provider is a data change: register a ``ProviderProfile`` and the
facade dispatches to it without new branches.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from chatgate.errors import UnknownProviderError

Dialect = Literal["claude", "openai-chat", "openai-responses"]
AuthScheme = Literal["x-api-key", "bearer"]


@dataclass(frozen=True)
class SearchVariant:
    """Where and how a provider serves tool-enabled (web search) requests."""

    endpoint: str
    dialect: Dialect


@dataclass(frozen=True)
class ProviderProfile:
    """Static description of one provider."""

    name: str
    endpoint: str
    dialect: Dialect
    auth: AuthScheme
    #: Environment variable holding this provider's API key.
    api_key_env: str
    default_model: str = "gpt-4o"
    search: SearchVariant | None = None
    #: Whether the ``thinking`` option is forwarded in request bodies.
    supports_thinking: bool = False

    @property
    def supports_web_search(self) -> bool:
        return self.search is not None


_PROVIDERS: dict[str, ProviderProfile] = {}


def register_provider(profile: ProviderProfile) -> None:
    """Add or replace a provider profile."""
    _PROVIDERS[profile.name] = profile


def get_profile(provider: str) -> ProviderProfile:
    """Return the profile for *provider* or raise ``UnknownProviderError``."""
    try:
        return _PROVIDERS[provider]
    except (KeyError, TypeError):
        raise UnknownProviderError(
            str(provider),
            hint=f"Supported providers: {', '.join(provider_names())}",
        ) from None


def provider_names() -> list[str]:
    return sorted(_PROVIDERS)


register_provider(
    ProviderProfile(
        name="claude",
        endpoint="https://api.anthropic.com/v1/messages",
        dialect="claude",
        auth="x-api-key",
        api_key_env="ANTHROPIC_API_KEY",
        default_model="claude-sonnet-4-20250514",
    )
)
register_provider(
    ProviderProfile(
        name="openai",
        endpoint="https://api.openai.com/v1/chat/completions",
        dialect="openai-chat",
        auth="bearer",
        api_key_env="OPENAI_API_KEY",
        search=SearchVariant(
            endpoint="https://api.openai.com/v1/responses",
            dialect="openai-responses",
        ),
    )
)
register_provider(
    ProviderProfile(
        name="moonshot",
        endpoint="https://api.moonshot.ai/v1/chat/completions",
        dialect="openai-chat",
        auth="bearer",
        api_key_env="MOONSHOT_API_KEY",
        search=SearchVariant(
            endpoint="https://api.moonshot.ai/v1/chat/completions",
            dialect="openai-chat",
        ),
        supports_thinking=True,
    )
)
register_provider(
    ProviderProfile(
        name="grok",
        endpoint="https://api.x.ai/v1/chat/completions",
        dialect="openai-chat",
        auth="bearer",
        api_key_env="XAI_API_KEY",
        search=SearchVariant(
            endpoint="https://api.x.ai/v1/responses",
            dialect="openai-responses",
        ),
    )
)
