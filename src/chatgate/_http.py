"""Small HTTP-related constants shared across chatgate.

This module is intentionally tiny to avoid circular imports and drift.
"""

from __future__ import annotations

ANTHROPIC_VERSION = "2023-06-01"

# Output budget sent with every chat-completion request.
DEFAULT_MAX_TOKENS = 1024

# Hard cap on provider round trips inside one tool-call loop.
MAX_TOOL_ITERATIONS = 5

DEFAULT_TIMEOUT_S = 60.0

JSON_CONTENT_TYPE = "application/json"


def is_success(status_code: int) -> bool:
    """Return True for a 2xx status."""
    return 200 <= status_code < 300
