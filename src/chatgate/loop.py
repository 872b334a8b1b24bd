"""Bounded tool-call loop for providers that search autonomously.

The loop keeps calling the provider until it stops requesting tools or the
iteration cap is hit. Tool calls are not executed: each call's own arguments
are sent back as its result, which satisfies the provider's requirement that
every tool call gets a tool-result turn.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import TYPE_CHECKING, Any

from chatgate._http import MAX_TOOL_ITERATIONS
from chatgate.caller import client_scope, coerce_messages, route_for, send_turn
from chatgate.errors import MaxIterationsExceeded
from chatgate.providers.models import STOP, TOOL_CALLS, CanonicalResult

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    import httpx

    from chatgate.providers.models import ConversationMessage, Turn
    from chatgate.providers.registry import ProviderProfile

logger = logging.getLogger(__name__)


@dataclass
class _LoopState:
    """Mutable state owned by exactly one ``run_tool_loop`` call."""

    transcript: list[dict[str, Any]]
    input_tokens: int = 0
    output_tokens: int = 0
    search_trace: list[str] = field(default_factory=list)

    def add_usage(self, turn: Turn) -> None:
        self.input_tokens += turn.usage.input_tokens or 0
        self.output_tokens += turn.usage.output_tokens or 0

    def result(self, turn: Turn) -> CanonicalResult:
        return CanonicalResult(
            text=turn.text,
            input_tokens=self.input_tokens,
            output_tokens=self.output_tokens,
            search_trace=tuple(self.search_trace) or None,
        )


async def run_tool_loop(
    profile: ProviderProfile,
    api_key: str,
    model: str,
    system_prompt: str,
    messages: Sequence[ConversationMessage | Mapping[str, Any]],
    *,
    thinking: str | None = None,
    client: httpx.AsyncClient | None = None,
    max_iterations: int = MAX_TOOL_ITERATIONS,
) -> CanonicalResult:
    """Run the tool-enabled variant of *profile* to a final answer.

    Token totals are summed over every turn, including the final one. A
    failing turn discards everything accumulated so far.

    Raises:
        ProviderHttpError: Any turn answered with a non-2xx status.
        ProviderShapeError: Any turn had no choices/output.
        MaxIterationsExceeded: Still requesting tools after *max_iterations*.
    """
    route = route_for(profile, tools_enabled=True)
    state = _LoopState(
        transcript=route.dialect.initial_transcript(
            system_prompt, coerce_messages(messages)
        )
    )

    async with client_scope(client) as http:
        for iteration in range(1, max_iterations + 1):
            turn = await send_turn(
                http,
                profile,
                route,
                api_key=api_key,
                model=model,
                system_prompt=system_prompt,
                transcript=state.transcript,
                thinking=thinking,
            )
            state.add_usage(turn)
            state.search_trace.extend(turn.search_trace)
            logger.debug(
                "Tool loop provider=%s turn=%d stop=%s tool_calls=%d",
                profile.name,
                iteration,
                turn.stop_reason,
                len(turn.tool_calls),
            )

            if turn.stop_reason == TOOL_CALLS and turn.tool_calls:
                state.search_trace.extend(tc.arguments for tc in turn.tool_calls)
                state.transcript.extend(route.dialect.tool_turn_messages(turn))
                continue

            if turn.stop_reason != STOP:
                logger.warning(
                    "Unrecognized stop signal %r from %s; returning available text",
                    turn.stop_reason,
                    profile.name,
                )
            return state.result(turn)

    raise MaxIterationsExceeded(profile.name, max_iterations)
