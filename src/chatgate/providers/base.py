"""Wire dialect protocol: minimal interface for provider request/response shapes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chatgate.providers.models import ConversationMessage, Turn
    from chatgate.providers.registry import Dialect


@runtime_checkable
class WireDialect(Protocol):
    """Builds request bodies for, and normalizes responses from, one dialect.

    Implementations are stateless; all per-call state lives in the transcript
    the caller passes in.
    """

    name: Dialect

    @property
    def extra_headers(self) -> dict[str, str]:
        """Headers sent in addition to auth and content type."""
        ...

    def initial_transcript(
        self, system_prompt: str, messages: Sequence[ConversationMessage]
    ) -> list[dict[str, Any]]:
        """Convert caller history into this dialect's message list."""
        ...

    def build_body(
        self,
        *,
        model: str,
        system_prompt: str,
        transcript: list[dict[str, Any]],
        tools_enabled: bool,
        thinking: str | None = None,
    ) -> dict[str, Any]:
        """Return the JSON request body."""
        ...

    def parse_turn(self, data: Any, *, provider: str) -> Turn:
        """Normalize a decoded success response into a ``Turn``."""
        ...

    def tool_turn_messages(self, turn: Turn) -> list[dict[str, Any]]:
        """Transcript entries answering every tool call in *turn*."""
        ...
