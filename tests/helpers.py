"""Test helpers (small, reusable doubles).

Keep this file tiny and purpose-built: every suite fakes the network the same
way, through ``httpx.MockTransport`` serving a scripted reply queue.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from typing import Any

import httpx


@dataclass
class ScriptedTransport:
    """Serve queued replies in order and record every request.

    Each queued item is ``(status, body)`` where a non-string body is sent as
    JSON, or an exception instance which is raised from the transport.
    """

    script: list[tuple[int, Any] | BaseException] = field(default_factory=list)
    requests: list[httpx.Request] = field(default_factory=list)

    def reply(self, body: Any, status: int = 200) -> ScriptedTransport:
        self.script.append((status, body))
        return self

    def fail(self, exc: BaseException) -> ScriptedTransport:
        self.script.append(exc)
        return self

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.script:
            raise AssertionError(f"Unexpected request #{len(self.requests)}")
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        status, body = item
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self._handle))

    @property
    def calls(self) -> int:
        return len(self.requests)

    def body(self, index: int = 0) -> dict[str, Any]:
        return json.loads(self.requests[index].content)

    def headers(self, index: int = 0) -> httpx.Headers:
        return self.requests[index].headers


def chat_reply(
    content: str | None = "ok",
    *,
    finish_reason: str | None = "stop",
    tool_calls: list[dict[str, Any]] | None = None,
    prompt_tokens: int | None = None,
    completion_tokens: int | None = None,
) -> dict[str, Any]:
    """Build an OpenAI chat-completions response body."""
    message: dict[str, Any] = {"role": "assistant", "content": content}
    if tool_calls is not None:
        message["tool_calls"] = tool_calls
    usage: dict[str, int] = {}
    if prompt_tokens is not None:
        usage["prompt_tokens"] = prompt_tokens
    if completion_tokens is not None:
        usage["completion_tokens"] = completion_tokens
    return {
        "choices": [{"finish_reason": finish_reason, "message": message}],
        "usage": usage,
    }


def search_call(call_id: str, query: str) -> dict[str, Any]:
    """Build one ``$web_search`` tool-call descriptor."""
    return {
        "id": call_id,
        "type": "function",
        "function": {
            "name": "$web_search",
            "arguments": json.dumps({"query": query}),
        },
    }


def tool_turn(*calls: dict[str, Any], prompt: int = 1, completion: int = 1) -> dict[str, Any]:
    """A chat-completions turn that requests *calls*."""
    return chat_reply(
        None,
        finish_reason="tool_calls",
        tool_calls=list(calls),
        prompt_tokens=prompt,
        completion_tokens=completion,
    )
