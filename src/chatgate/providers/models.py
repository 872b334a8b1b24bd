"""Domain models for the provider transport layer."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

from chatgate.errors import ConfigurationError

Role = Literal["user", "assistant"]

#: Normalized stop signals. Providers may report anything else; the tool loop
#: treats unknown values as terminal.
STOP = "stop"
TOOL_CALLS = "tool_calls"


@dataclass(frozen=True)
class ConversationMessage:
    """One turn of stored chat history supplied by the caller."""

    role: Role
    content: str

    @classmethod
    def coerce(cls, value: ConversationMessage | Mapping[str, Any]) -> ConversationMessage:
        """Accept an instance or a ``{"role", "content"}`` mapping."""
        if isinstance(value, ConversationMessage):
            role, content = value.role, value.content
        elif isinstance(value, Mapping):
            role, content = value.get("role"), value.get("content", "")
        else:
            raise ConfigurationError(
                f"Expected a conversation message, got {type(value).__name__}",
                hint="Pass {'role': 'user', 'content': '...'}.",
            )
        if role not in ("user", "assistant"):
            raise ConfigurationError(
                f"Unsupported message role: {role!r}",
                hint="Conversation messages must use role 'user' or 'assistant'.",
            )
        if not isinstance(content, str):
            raise ConfigurationError(
                "Message content must be a string",
                hint="Flatten multimodal content to text before calling.",
            )
        return cls(role=role, content=content)

    def to_wire(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class ToolCall:
    """A tool call requested by the model.

    ``arguments`` is the raw JSON string; ``raw`` is the descriptor exactly as
    the provider sent it, so it can be echoed back verbatim.
    """

    id: str
    name: str
    arguments: str
    raw: dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class Usage:
    """Token counts for one turn; ``None`` when the provider omitted them."""

    input_tokens: int | None = None
    output_tokens: int | None = None


@dataclass(frozen=True)
class Turn:
    """One normalized provider round trip."""

    text: str
    usage: Usage = field(default_factory=Usage)
    stop_reason: str | None = STOP
    tool_calls: tuple[ToolCall, ...] = ()
    search_trace: tuple[str, ...] = ()
    #: Assistant content as sent (may be ``None``), for transcript replay.
    raw_content: str | None = None


@dataclass(frozen=True)
class CanonicalResult:
    """The single normalized output of ``generate``, whatever the provider."""

    text: str
    input_tokens: int | None = None
    output_tokens: int | None = None
    search_trace: tuple[str, ...] | None = None

    @classmethod
    def from_turn(cls, turn: Turn) -> CanonicalResult:
        return cls(
            text=turn.text,
            input_tokens=turn.usage.input_tokens,
            output_tokens=turn.usage.output_tokens,
            search_trace=turn.search_trace or None,
        )
