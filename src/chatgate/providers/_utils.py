"""Shared utilities for dialect implementations."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from chatgate.errors import ProviderShapeError

M = TypeVar("M", bound=BaseModel)


def validate_payload(model: type[M], data: Any, *, provider: str) -> M:
    """Validate a decoded response body, mapping failures to ProviderShapeError."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ProviderShapeError(
            f"{provider} API returned an unexpected response shape: "
            f"{e.error_count()} validation error(s)",
            provider=provider,
            phase="parse",
        ) from e
