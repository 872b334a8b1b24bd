"""OpenAI-compatible chat-completions dialect (OpenAI, Moonshot, Grok)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, NonNegativeInt

from chatgate._http import DEFAULT_MAX_TOKENS
from chatgate.errors import ProviderShapeError
from chatgate.providers._utils import validate_payload
from chatgate.providers.models import ToolCall, Turn, Usage

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chatgate.providers.models import ConversationMessage

#: Moonshot's server-side search, requested as a builtin function.
WEB_SEARCH_TOOL: dict[str, Any] = {
    "type": "builtin_function",
    "function": {"name": "$web_search"},
}


class _Function(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str = ""
    arguments: str = ""


class _ToolCall(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str = ""
    type: str = "function"
    function: _Function


class _Message(BaseModel):
    model_config = ConfigDict(extra="allow")

    role: str = "assistant"
    content: str | None = None
    tool_calls: list[_ToolCall] | None = None


class _Choice(BaseModel):
    finish_reason: str | None = None
    message: _Message


class _Usage(BaseModel):
    prompt_tokens: NonNegativeInt | None = None
    completion_tokens: NonNegativeInt | None = None


class ChatCompletionResponse(BaseModel):
    """The subset of a chat-completions response chatgate reads."""

    choices: list[_Choice]
    usage: _Usage | None = None


class OpenAIChatDialect:
    """System prompt as the first message, bearer auth, ``choices[0]`` answer."""

    name = "openai-chat"

    @property
    def extra_headers(self) -> dict[str, str]:
        return {}

    def initial_transcript(
        self, system_prompt: str, messages: Sequence[ConversationMessage]
    ) -> list[dict[str, Any]]:
        return [
            {"role": "system", "content": system_prompt},
            *(m.to_wire() for m in messages),
        ]

    def build_body(
        self,
        *,
        model: str,
        system_prompt: str,
        transcript: list[dict[str, Any]],
        tools_enabled: bool,
        thinking: str | None = None,
    ) -> dict[str, Any]:
        _ = system_prompt
        body: dict[str, Any] = {
            "model": model,
            "max_tokens": DEFAULT_MAX_TOKENS,
            "messages": list(transcript),
        }
        # Omit the key entirely when disabled; some endpoints reject tools=[].
        if tools_enabled:
            body["tools"] = [WEB_SEARCH_TOOL]
        if thinking is not None:
            body["thinking"] = {"type": thinking}
        return body

    def parse_turn(self, data: Any, *, provider: str) -> Turn:
        response = validate_payload(ChatCompletionResponse, data, provider=provider)
        if not response.choices:
            raise ProviderShapeError(
                f"{provider} API returned no choices",
                provider=provider,
                phase="parse",
            )

        choice = response.choices[0]
        message = choice.message
        tool_calls = tuple(
            ToolCall(
                id=tc.id,
                name=tc.function.name,
                arguments=tc.function.arguments,
                raw=tc.model_dump(),
            )
            for tc in message.tool_calls or []
        )
        usage = response.usage or _Usage()
        return Turn(
            text=message.content or "",
            usage=Usage(usage.prompt_tokens, usage.completion_tokens),
            stop_reason=choice.finish_reason,
            tool_calls=tool_calls,
            raw_content=message.content,
        )

    def tool_turn_messages(self, turn: Turn) -> list[dict[str, Any]]:
        entries: list[dict[str, Any]] = [
            {
                "role": "assistant",
                "content": turn.raw_content,
                "tool_calls": [tc.raw for tc in turn.tool_calls],
            }
        ]
        entries.extend(
            {
                "role": "tool",
                "tool_call_id": tc.id,
                "name": tc.name,
                "content": tc.arguments,
            }
            for tc in turn.tool_calls
        )
        return entries
