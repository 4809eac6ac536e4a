"""Error taxonomy shared by provider adapters."""

from __future__ import annotations


class ProviderError(RuntimeError):
    """Base error raised for provider failures.

    ``retryable`` tells callers whether the same request may succeed later;
    the API maps it to 503 (retryable) or 500.
    """

    def __init__(
        self,
        message: str,
        *,
        provider: str = "unknown",
        code: str | None = None,
        retryable: bool = False,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.code = code
        self.retryable = retryable
        self.status_code = status_code


class ProviderConfigError(ProviderError):
    """Raised when configuration is missing or invalid."""

    def __init__(self, message: str, *, provider: str = "unknown") -> None:
        super().__init__(message, provider=provider, code="configuration_error", retryable=False)


class ProviderResponseError(ProviderError):
    """Raised when a provider returns an unusable response."""

    def __init__(self, message: str, *, provider: str = "unknown") -> None:
        super().__init__(message, provider=provider, code="invalid_response", retryable=True)


class ProviderAuthError(ProviderError):
    def __init__(self, message: str, *, provider: str = "unknown", status_code: int | None = 401) -> None:
        super().__init__(
            message, provider=provider, code="authentication_error", retryable=False, status_code=status_code
        )


class RateLimitError(ProviderError):
    def __init__(
        self,
        message: str,
        *,
        provider: str = "unknown",
        retry_after: float | None = None,
        status_code: int | None = 429,
    ) -> None:
        super().__init__(
            message, provider=provider, code="rate_limit_exceeded", retryable=True, status_code=status_code
        )
        self.retry_after = retry_after


class ContextLengthError(ProviderError):
    def __init__(self, message: str, *, provider: str = "unknown", status_code: int | None = 400) -> None:
        super().__init__(
            message, provider=provider, code="context_length_exceeded", retryable=False, status_code=status_code
        )
