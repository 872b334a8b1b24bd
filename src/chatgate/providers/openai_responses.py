"""OpenAI-style Responses API dialect (OpenAI and Grok web search)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, NonNegativeInt

from chatgate.errors import ProviderShapeError
from chatgate.providers._utils import validate_payload
from chatgate.providers.models import STOP, TOOL_CALLS, ToolCall, Turn, Usage

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chatgate.providers.models import ConversationMessage

WEB_SEARCH_TOOL: dict[str, Any] = {"type": "web_search"}


class _ContentPart(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str = "output_text"
    text: str | None = None


class _OutputItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str
    content: list[_ContentPart] | None = None
    # function_call items
    call_id: str | None = None
    name: str | None = None
    arguments: str | None = None


class _Usage(BaseModel):
    input_tokens: NonNegativeInt | None = None
    output_tokens: NonNegativeInt | None = None
    # Some compatible endpoints still report chat-completions field names.
    prompt_tokens: NonNegativeInt | None = None
    completion_tokens: NonNegativeInt | None = None

    def normalized(self) -> Usage:
        return Usage(
            self.input_tokens if self.input_tokens is not None else self.prompt_tokens,
            self.output_tokens
            if self.output_tokens is not None
            else self.completion_tokens,
        )


class ResponsesAPIResponse(BaseModel):
    """The subset of a Responses API response chatgate reads."""

    id: str | None = None
    status: str | None = None
    output: list[_OutputItem]
    usage: _Usage | None = None


class OpenAIResponsesDialect:
    """One flattened ``input`` array; answer is the first message item."""

    name = "openai-responses"

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
        _ = system_prompt, thinking
        body: dict[str, Any] = {"model": model, "input": list(transcript)}
        if tools_enabled:
            body["tools"] = [WEB_SEARCH_TOOL]
        body["store"] = False
        return body

    def parse_turn(self, data: Any, *, provider: str) -> Turn:
        response = validate_payload(ResponsesAPIResponse, data, provider=provider)
        if not response.output:
            raise ProviderShapeError(
                f"{provider} API returned no output",
                provider=provider,
                phase="parse",
            )

        text = ""
        message = next((i for i in response.output if i.type == "message"), None)
        if message is not None:
            text = next(
                (
                    p.text or ""
                    for p in message.content or []
                    if p.type == "output_text"
                ),
                "",
            )

        tool_calls = tuple(
            ToolCall(
                id=item.call_id or "",
                name=item.name or "",
                arguments=item.arguments or "{}",
                raw=item.model_dump(exclude_none=True),
            )
            for item in response.output
            if item.type == "function_call"
        )
        searches = sum(1 for i in response.output if i.type == "web_search_call")
        trace = (f"web_search ({searches} call(s))",) if searches else ()

        stop: str | None
        if tool_calls:
            stop = TOOL_CALLS
        elif response.status in (None, "completed"):
            stop = STOP
        else:
            stop = response.status

        usage = response.usage or _Usage()
        return Turn(
            text=text,
            usage=usage.normalized(),
            stop_reason=stop,
            tool_calls=tool_calls,
            search_trace=trace,
            raw_content=text or None,
        )

    def tool_turn_messages(self, turn: Turn) -> list[dict[str, Any]]:
        # Each function_call output must reference a replayed function_call item.
        entries: list[dict[str, Any]] = [
            {
                "type": "function_call",
                "call_id": tc.id,
                "name": tc.name,
                "arguments": tc.arguments,
            }
            for tc in turn.tool_calls
        ]
        entries.extend(
            {
                "type": "function_call_output",
                "call_id": tc.id,
                "output": tc.arguments,
            }
            for tc in turn.tool_calls
        )
        return entries
