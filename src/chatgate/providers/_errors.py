"""Shared provider-side error helpers.

Map HTTP outcomes and transport failures into the chatgate error taxonomy so
callers can branch on type instead of brittle substring matching.
"""

from __future__ import annotations

import httpx

from chatgate.errors import APIError, ProviderHttpError


def _auth_hint(status_code: int | None, api_key_env: str | None) -> str | None:
    """Generate a hint for auth errors where naming the env var is useful."""
    if status_code in {401, 403}:
        env_var = api_key_env or "API key"
        return f"Check credentials/permissions (try setting {env_var} or AI_API_KEY)."
    return None


def http_status_error(
    response: httpx.Response,
    *,
    provider: str,
    api_key_env: str | None = None,
) -> ProviderHttpError:
    """Build a ProviderHttpError from a non-success response, body verbatim."""
    return ProviderHttpError(
        provider,
        response.status_code,
        response.text,
        hint=_auth_hint(response.status_code, api_key_env),
    )


def wrap_transport_error(
    exc: httpx.HTTPError,
    *,
    provider: str,
    phase: str = "generate",
) -> APIError:
    """Map an httpx transport failure into APIError."""
    hint = None
    if isinstance(exc, httpx.TimeoutException):
        hint = "The provider did not answer in time; raise Config.request_timeout_s."
    cause = str(exc) or type(exc).__name__
    return APIError(
        f"{provider} {phase} failed: {cause}",
        hint=hint,
        provider=provider,
        phase=phase,
    )
