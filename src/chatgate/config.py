"""Configuration: frozen Config resolved from arguments and the environment."""

from __future__ import annotations

from dataclasses import dataclass, field
import os

from dotenv import load_dotenv

from chatgate._http import DEFAULT_TIMEOUT_S
from chatgate.errors import ConfigurationError
from chatgate.options import Options, options_from_env
from chatgate.providers.registry import get_profile

load_dotenv()

DEFAULT_PROVIDER = "claude"
DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant."

#: Provider-neutral key, checked before the provider-specific variable.
GENERIC_API_KEY_ENV = "AI_API_KEY"


@dataclass(frozen=True)
class Config:
    """Immutable configuration for ``chatgate.run``.

    Unset fields are resolved from the environment: ``AI_PROVIDER``,
    ``AI_MODEL``, then ``AI_API_KEY`` or the provider's own key variable.

    Example:
        config = Config(provider="moonshot")
        # API key resolved from AI_API_KEY or MOONSHOT_API_KEY
    """

    provider: str | None = None
    model: str | None = None
    api_key: str | None = None
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    request_timeout_s: float = DEFAULT_TIMEOUT_S
    #: Default mode flags for ``run`` calls that pass no options of their own.
    options: Options = field(default_factory=Options)

    def __post_init__(self) -> None:
        """Resolve defaults and validate configuration."""
        provider = self.provider or os.environ.get("AI_PROVIDER") or DEFAULT_PROVIDER
        profile = get_profile(provider)
        object.__setattr__(self, "provider", provider)

        if not self.model:
            object.__setattr__(
                self, "model", os.environ.get("AI_MODEL") or profile.default_model
            )

        if self.request_timeout_s <= 0:
            raise ConfigurationError(
                f"request_timeout_s must be > 0, got {self.request_timeout_s}",
                hint="This bounds each HTTP request to the provider.",
            )

        object.__setattr__(self, "options", Options.coerce(self.options))

        if not isinstance(self.system_prompt, str):
            raise ConfigurationError(
                "system_prompt must be a string",
                hint="Pass system_prompt='You are a concise assistant.'",
            )

        if self.api_key is None:
            resolved = os.environ.get(GENERIC_API_KEY_ENV) or os.environ.get(
                profile.api_key_env
            )
            object.__setattr__(self, "api_key", resolved)

        if not self.api_key:
            raise ConfigurationError(
                f"API key required for {provider}",
                hint=(
                    f"Set {GENERIC_API_KEY_ENV} or {profile.api_key_env} "
                    "environment variable or pass api_key=..."
                ),
            )

    @classmethod
    def from_env(cls) -> Config:
        """Build a Config purely from environment variables.

        Mode flags come from ``AI_WEB_SEARCH`` and ``AI_THINKING``.
        """
        return cls(
            system_prompt=os.environ.get("AI_SYSTEM_PROMPT") or DEFAULT_SYSTEM_PROMPT,
            options=options_from_env(),
        )

    def __str__(self) -> str:
        """Return a redacted, developer-friendly representation."""
        return (
            f"Config(provider={self.provider!r}, model={self.model!r}, "
            f"api_key={'[REDACTED]' if self.api_key else None})"
        )

    __repr__ = __str__
