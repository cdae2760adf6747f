"""Provider error taxonomy.

Error classes for the LLM provider abstraction layer. Adapters translate
SDK exceptions into these so the generation service can decide between
retrying and falling back without knowing which vendor is configured.
"""


__all__ = [
    "ProviderError",
    "RateLimitError",
    "AuthenticationError",
    "ModelNotFoundError",
    "ContentFilterError",
    "ContextLengthError",
    "TransientError",
    "MalformedResponseError",
]


class ProviderError(Exception):
    """Base class for all provider errors.

    Callers catch every provider failure with a single handler.
    """

    pass


class RateLimitError(ProviderError):
    """Rate limit exceeded.

    WHY SEPARATE FROM TRANSIENT:
    - May carry a retry_after_seconds hint from the provider
    """

    def __init__(self, message: str, retry_after_seconds: float | None = None):
        """Initialize RateLimitError.

        Args:
            message: Error description from the provider.
            retry_after_seconds: Optional hint from provider on when to retry.
        """
        super().__init__(message)
        self.retry_after_seconds = retry_after_seconds


class AuthenticationError(ProviderError):
    """Invalid or expired API key. Not retryable."""

    pass


class ModelNotFoundError(ProviderError):
    """Requested model doesn't exist or isn't accessible."""

    pass


class ContentFilterError(ProviderError):
    """Content blocked by the provider's safety filter."""

    pass


class ContextLengthError(ProviderError):
    """Input exceeded the model's context window."""

    pass


class TransientError(ProviderError):
    """Temporary failure (network, server overload).

    Safe to retry with exponential backoff. Includes connection errors,
    timeouts, and 5xx responses.
    """

    pass


class MalformedResponseError(ProviderError):
    """The provider answered, but the content is not the expected shape.

    Raised by the generation service when JSON parsing or schema validation
    fails, so malformed output follows the same fallback path as an outage.
    """

    pass
