"""Exception hierarchy for chatgate."""

from __future__ import annotations


class GatewayError(Exception):
    """Base exception for all chatgate errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(GatewayError):
    """Caller input or configuration validation failed."""


class UnknownProviderError(ConfigurationError):
    """The provider identifier is not registered."""

    def __init__(self, provider: str, *, hint: str | None = None) -> None:
        super().__init__(f"Unknown AI provider: {provider}", hint=hint)
        self.provider = provider


class InvalidOptionError(ConfigurationError):
    """An option value is outside its accepted set."""


class APIError(GatewayError):
    """Provider call failed.

    Carries enough context (provider, HTTP status, phase) for the caller to
    log or display the failure. Nothing in chatgate retries on it.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        status_code: int | None = None,
        provider: str | None = None,
        phase: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status_code = status_code
        self.provider = provider
        self.phase = phase


class ProviderHttpError(APIError):
    """The provider endpoint answered with a non-success status.

    ``body`` is the response text, kept verbatim for diagnostics.
    """

    def __init__(
        self,
        provider: str,
        status_code: int,
        body: str,
        *,
        hint: str | None = None,
    ) -> None:
        super().__init__(
            f"{provider} API error: {status_code} - {body}",
            hint=hint,
            status_code=status_code,
            provider=provider,
            phase="generate",
        )
        self.body = body


class ProviderShapeError(APIError):
    """A success response lacked the fields needed to extract an answer."""


class MaxIterationsExceeded(APIError):
    """The tool-call loop never reached a terminal stop signal."""

    def __init__(self, provider: str, max_iterations: int) -> None:
        super().__init__(
            f"{provider} web search exceeded maximum iterations ({max_iterations})",
            hint="The provider kept requesting tool calls; retry without web search.",
            provider=provider,
            phase="tool_loop",
        )
        self.max_iterations = max_iterations
