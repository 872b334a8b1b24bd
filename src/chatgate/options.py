"""Per-call mode flags for ``generate``."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import os
from typing import Any, Literal, get_args

from chatgate.errors import InvalidOptionError

ThinkingMode = Literal["disabled", "enabled", "auto"]
THINKING_MODES: tuple[str, ...] = get_args(ThinkingMode)

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"", "0", "false", "no", "off"}


@dataclass(frozen=True)
class Options:
    """Optional features for ``generate()``.

    Flags a provider cannot honor are ignored rather than rejected; only
    malformed values fail.
    """

    #: Route through the provider's tool-enabled variant, when it has one.
    web_search: bool = False
    #: Forwarded only to providers that accept a thinking mode.
    thinking: ThinkingMode | None = None

    def __post_init__(self) -> None:
        """Validate option values before any network call."""
        if not isinstance(self.web_search, bool):
            raise InvalidOptionError(
                "web_search must be a boolean",
                hint="Pass web_search=True or web_search=False.",
            )
        if self.thinking is not None and self.thinking not in THINKING_MODES:
            raise InvalidOptionError(
                f"Invalid thinking mode: {self.thinking!r}",
                hint=f"Expected one of: {', '.join(THINKING_MODES)}.",
            )

    @classmethod
    def coerce(cls, value: Options | Mapping[str, Any] | None) -> Options:
        """Accept an instance, a ``{"web_search", "thinking"}`` mapping, or None."""
        if value is None:
            return cls()
        if isinstance(value, Options):
            return value
        if isinstance(value, Mapping):
            unknown = set(value) - {"web_search", "thinking"}
            if unknown:
                raise InvalidOptionError(
                    f"Unknown option(s): {', '.join(sorted(unknown))}",
                    hint="Supported options: web_search, thinking.",
                )
            return cls(**value)
        raise InvalidOptionError(
            f"options must be Options or a mapping, got {type(value).__name__}"
        )


def read_thinking_env(name: str) -> ThinkingMode | None:
    """Read a thinking mode from environment variable *name*.

    Unset or empty means no mode. Values are trimmed and lower-cased.
    """
    value = os.environ.get(name)
    if not value:
        return None

    normalized = value.strip().lower()
    if normalized in THINKING_MODES:
        return normalized  # type: ignore[return-value]

    raise InvalidOptionError(
        f"Invalid value for environment variable: {name}. "
        "Expected disabled, enabled, or auto.",
    )


def read_flag_env(name: str) -> bool:
    """Read a boolean flag from environment variable *name* (unset is False)."""
    normalized = os.environ.get(name, "").strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    raise InvalidOptionError(
        f"Invalid value for environment variable: {name}. Expected true or false.",
    )


def options_from_env(
    *, web_search_var: str = "AI_WEB_SEARCH", thinking_var: str = "AI_THINKING"
) -> Options:
    """Build Options from environment variables."""
    return Options(
        web_search=read_flag_env(web_search_var),
        thinking=read_thinking_env(thinking_var),
    )
