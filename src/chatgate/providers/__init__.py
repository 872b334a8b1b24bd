"""Provider registry and wire dialects."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .anthropic import ClaudeDialect
from .base import WireDialect
from .openai_chat import OpenAIChatDialect
from .openai_responses import OpenAIResponsesDialect
from .registry import (
    ProviderProfile,
    SearchVariant,
    get_profile,
    provider_names,
    register_provider,
)

if TYPE_CHECKING:
    from .registry import Dialect

_DIALECTS: dict[str, WireDialect] = {
    "claude": ClaudeDialect(),
    "openai-chat": OpenAIChatDialect(),
    "openai-responses": OpenAIResponsesDialect(),
}


def get_dialect(name: Dialect) -> WireDialect:
    """Return the stateless dialect implementation for *name*."""
    return _DIALECTS[name]


__all__ = [
    "ClaudeDialect",
    "OpenAIChatDialect",
    "OpenAIResponsesDialect",
    "ProviderProfile",
    "SearchVariant",
    "WireDialect",
    "get_dialect",
    "get_profile",
    "provider_names",
    "register_provider",
]
