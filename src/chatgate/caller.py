"""Single-turn caller: one POST per invocation, normalized result, no retries."""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Any

import httpx

from chatgate._http import DEFAULT_TIMEOUT_S, JSON_CONTENT_TYPE, is_success
from chatgate.errors import ProviderShapeError
from chatgate.providers import get_dialect
from chatgate.providers._errors import http_status_error, wrap_transport_error
from chatgate.providers.models import CanonicalResult, ConversationMessage

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Mapping, Sequence

    from chatgate.providers.base import WireDialect
    from chatgate.providers.models import Turn
    from chatgate.providers.registry import ProviderProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Route:
    """Endpoint and dialect chosen for one call."""

    endpoint: str
    dialect: WireDialect
    tools_enabled: bool


def route_for(profile: ProviderProfile, *, tools_enabled: bool) -> Route:
    """Pick the plain or tool-enabled variant of *profile*.

    Providers without a tool-enabled variant fall back to the plain endpoint.
    """
    if tools_enabled and profile.search is not None:
        return Route(
            endpoint=profile.search.endpoint,
            dialect=get_dialect(profile.search.dialect),
            tools_enabled=True,
        )
    return Route(
        endpoint=profile.endpoint,
        dialect=get_dialect(profile.dialect),
        tools_enabled=False,
    )


def auth_headers(profile: ProviderProfile, api_key: str) -> dict[str, str]:
    """Return auth and content headers for *profile*."""
    headers = {"content-type": JSON_CONTENT_TYPE}
    if profile.auth == "x-api-key":
        headers["x-api-key"] = api_key
    else:
        headers["Authorization"] = f"Bearer {api_key}"
    return headers


def coerce_messages(
    messages: Sequence[ConversationMessage | Mapping[str, Any]],
) -> list[ConversationMessage]:
    return [ConversationMessage.coerce(m) for m in messages]


@asynccontextmanager
async def client_scope(
    client: httpx.AsyncClient | None,
    *,
    timeout_s: float = DEFAULT_TIMEOUT_S,
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield *client*, or a fresh one closed on exit when none was given."""
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=timeout_s) as owned:
        yield owned


async def send_turn(
    client: httpx.AsyncClient,
    profile: ProviderProfile,
    route: Route,
    *,
    api_key: str,
    model: str,
    system_prompt: str,
    transcript: list[dict[str, Any]],
    thinking: str | None = None,
) -> Turn:
    """POST one request and normalize the reply into a ``Turn``.

    Raises:
        ProviderHttpError: The endpoint answered with a non-2xx status.
        ProviderShapeError: A 2xx body lacked what the dialect needs.
        APIError: The request never completed (transport failure).
    """
    dialect = route.dialect
    body = dialect.build_body(
        model=model,
        system_prompt=system_prompt,
        transcript=transcript,
        tools_enabled=route.tools_enabled,
        thinking=thinking if profile.supports_thinking else None,
    )
    headers = {**auth_headers(profile, api_key), **dialect.extra_headers}

    logger.debug(
        "POST provider=%s dialect=%s messages=%d tools=%s",
        profile.name,
        dialect.name,
        len(transcript),
        route.tools_enabled,
    )
    try:
        response = await client.post(route.endpoint, json=body, headers=headers)
    except httpx.HTTPError as e:
        raise wrap_transport_error(e, provider=profile.name) from e

    if not is_success(response.status_code):
        raise http_status_error(
            response, provider=profile.name, api_key_env=profile.api_key_env
        )

    try:
        data = response.json()
    except ValueError as e:
        raise ProviderShapeError(
            f"{profile.name} API returned a non-JSON body",
            provider=profile.name,
            phase="parse",
        ) from e
    return dialect.parse_turn(data, provider=profile.name)


async def call_once(
    profile: ProviderProfile,
    api_key: str,
    model: str,
    system_prompt: str,
    messages: Sequence[ConversationMessage | Mapping[str, Any]],
    *,
    tools_enabled: bool = False,
    thinking: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> CanonicalResult:
    """Issue exactly one provider request and return its canonical result."""
    route = route_for(profile, tools_enabled=tools_enabled)
    transcript = route.dialect.initial_transcript(
        system_prompt, coerce_messages(messages)
    )
    async with client_scope(client) as http:
        turn = await send_turn(
            http,
            profile,
            route,
            api_key=api_key,
            model=model,
            system_prompt=system_prompt,
            transcript=transcript,
            thinking=thinking,
        )
    return CanonicalResult.from_turn(turn)
