"""chatgate: one chat-completion contract over several LLM providers.

Public API:
    - generate(): Answer a conversation with a named provider
    - run(): The same, driven by a Config
    - Options: Per-call mode flags (web search, thinking)
    - Config: Provider/model/key resolution from arguments and environment
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from chatgate.caller import call_once, client_scope, coerce_messages
from chatgate.config import Config
from chatgate.errors import (
    APIError,
    ConfigurationError,
    GatewayError,
    InvalidOptionError,
    MaxIterationsExceeded,
    ProviderHttpError,
    ProviderShapeError,
    UnknownProviderError,
)
from chatgate.loop import run_tool_loop
from chatgate.options import Options, ThinkingMode, options_from_env
from chatgate.providers.models import CanonicalResult, ConversationMessage
from chatgate.providers.registry import (
    ProviderProfile,
    SearchVariant,
    get_profile,
    register_provider,
)

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    import httpx

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("chatgate")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("chatgate").addHandler(logging.NullHandler())

logger = logging.getLogger(__name__)


async def generate(
    provider: str,
    api_key: str,
    model: str,
    system_prompt: str,
    messages: Sequence[ConversationMessage | Mapping[str, Any]],
    options: Options | Mapping[str, Any] | None = None,
    *,
    client: httpx.AsyncClient | None = None,
) -> CanonicalResult:
    """Answer *messages* with *provider* and return a canonical result.

    Args:
        provider: Registered provider id (``claude``, ``openai``, ...).
        api_key: Credential for that provider.
        model: Provider model id.
        system_prompt: Sent verbatim in the provider's system slot.
        messages: Chat history, oldest first.
        options: ``web_search`` and ``thinking`` flags.
        client: Optional shared ``httpx.AsyncClient``; a private one is opened
            and closed around the call otherwise.

    Returns:
        CanonicalResult with text, token counts, and any search trace.

    Raises:
        UnknownProviderError: *provider* is not registered (no request sent).
        InvalidOptionError: An option is malformed (no request sent).
        ProviderHttpError, ProviderShapeError, MaxIterationsExceeded: The
            provider call failed.

    Example:
        result = await generate(
            "claude", key, "claude-sonnet-4-20250514", "Be brief.",
            [{"role": "user", "content": "Hi"}],
        )
        print(result.text)
    """
    profile = get_profile(provider)
    opts = Options.coerce(options)
    conversation = coerce_messages(messages)

    if opts.web_search and profile.supports_web_search:
        logger.debug("Dispatch provider=%s mode=tool_loop", profile.name)
        return await run_tool_loop(
            profile,
            api_key,
            model,
            system_prompt,
            conversation,
            thinking=opts.thinking,
            client=client,
        )

    logger.debug("Dispatch provider=%s mode=single_turn", profile.name)
    return await call_once(
        profile,
        api_key,
        model,
        system_prompt,
        conversation,
        thinking=opts.thinking,
        client=client,
    )


async def run(
    messages: Sequence[ConversationMessage | Mapping[str, Any]],
    *,
    config: Config,
    options: Options | Mapping[str, Any] | None = None,
    client: httpx.AsyncClient | None = None,
) -> CanonicalResult:
    """Run ``generate`` with provider, model, key, and prompt from *config*.

    *options* overrides ``config.options`` when given.

    Example:
        config = Config.from_env()
        result = await run([{"role": "user", "content": "Hi"}], config=config)
    """
    async with client_scope(client, timeout_s=config.request_timeout_s) as http:
        return await generate(
            config.provider or "",
            config.api_key or "",
            config.model or "",
            config.system_prompt,
            messages,
            options if options is not None else config.options,
            client=http,
        )


__all__ = [
    "APIError",
    "CanonicalResult",
    "Config",
    "ConfigurationError",
    "ConversationMessage",
    "GatewayError",
    "InvalidOptionError",
    "MaxIterationsExceeded",
    "Options",
    "ProviderHttpError",
    "ProviderProfile",
    "ProviderShapeError",
    "SearchVariant",
    "ThinkingMode",
    "UnknownProviderError",
    "generate",
    "options_from_env",
    "register_provider",
    "run",
]
