"""Claude (Anthropic Messages API) dialect."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, NonNegativeInt

from chatgate._http import ANTHROPIC_VERSION, DEFAULT_MAX_TOKENS
from chatgate.errors import ProviderShapeError
from chatgate.providers._utils import validate_payload
from chatgate.providers.models import STOP, TOOL_CALLS, ToolCall, Turn, Usage

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chatgate.providers.models import ConversationMessage

_STOP_SIGNALS = {"end_turn": STOP, "stop_sequence": STOP, "tool_use": TOOL_CALLS}

#: Client-side search tool; its tool_use calls are echoed back as tool_result.
WEB_SEARCH_TOOL: dict[str, Any] = {
    "name": "web_search",
    "description": "Search the web for current information.",
    "input_schema": {
        "type": "object",
        "properties": {"query": {"type": "string"}},
        "required": ["query"],
    },
}


class _ContentBlock(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str = "text"
    text: str | None = None
    id: str | None = None
    name: str | None = None
    input: Any = None


class _Usage(BaseModel):
    input_tokens: NonNegativeInt | None = None
    output_tokens: NonNegativeInt | None = None


class ClaudeResponse(BaseModel):
    """The subset of a Messages API response chatgate reads."""

    content: list[_ContentBlock]
    stop_reason: str | None = None
    usage: _Usage | None = None


class ClaudeDialect:
    """Top-level ``system`` field, ``x-api-key`` auth, nested usage object."""

    name = "claude"

    @property
    def extra_headers(self) -> dict[str, str]:
        return {"anthropic-version": ANTHROPIC_VERSION}

    def initial_transcript(
        self, system_prompt: str, messages: Sequence[ConversationMessage]
    ) -> list[dict[str, Any]]:
        # System prompt travels as a top-level field, not a message.
        _ = system_prompt
        return [m.to_wire() for m in messages]

    def build_body(
        self,
        *,
        model: str,
        system_prompt: str,
        transcript: list[dict[str, Any]],
        tools_enabled: bool,
        thinking: str | None = None,
    ) -> dict[str, Any]:
        _ = thinking
        body: dict[str, Any] = {
            "model": model,
            "max_tokens": DEFAULT_MAX_TOKENS,
            "system": system_prompt,
            "messages": list(transcript),
        }
        if tools_enabled:
            body["tools"] = [WEB_SEARCH_TOOL]
        return body

    def parse_turn(self, data: Any, *, provider: str) -> Turn:
        response = validate_payload(ClaudeResponse, data, provider=provider)
        if not response.content:
            raise ProviderShapeError(
                f"{provider} API returned no content",
                provider=provider,
                phase="parse",
            )

        text = next(
            (b.text or "" for b in response.content if b.type == "text"), ""
        )
        tool_calls = tuple(
            ToolCall(
                id=b.id or "",
                name=b.name or "",
                arguments=json.dumps(b.input or {}),
                raw=b.model_dump(exclude_none=True),
            )
            for b in response.content
            if b.type == "tool_use"
        )
        usage = response.usage or _Usage()
        stop = response.stop_reason
        return Turn(
            text=text,
            usage=Usage(usage.input_tokens, usage.output_tokens),
            stop_reason=_STOP_SIGNALS.get(stop, stop) if stop else STOP,
            tool_calls=tool_calls,
            raw_content=text or None,
        )

    def tool_turn_messages(self, turn: Turn) -> list[dict[str, Any]]:
        # Tool results go back as a user turn of tool_result blocks.
        content: list[dict[str, Any]] = []
        if turn.raw_content:
            content.append({"type": "text", "text": turn.raw_content})
        content.extend(tc.raw for tc in turn.tool_calls)
        return [
            {"role": "assistant", "content": content},
            {
                "role": "user",
                "content": [
                    {
                        "type": "tool_result",
                        "tool_use_id": tc.id,
                        "content": tc.arguments,
                    }
                    for tc in turn.tool_calls
                ],
            },
        ]
