"""Retry strategy for provider operations.

Exponential backoff with jitter for transient errors. Suggestion fetches
happen while the user waits on a wizard step, so the policy is short: a
couple of retries capped at a few seconds before the caller falls back.
"""

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, TypeVar

from career_compass.providers.errors import RateLimitError, TransientError

__all__ = ["with_retries", "backoff_delay"]

if TYPE_CHECKING:
    from career_compass.providers.config import ProviderConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


def backoff_delay(attempt: int, config: "ProviderConfig") -> float:
    """Seconds to wait before retry number ``attempt + 1``.

    Args:
        attempt: Zero-based index of the attempt that just failed.
        config: Provider configuration with retry settings.

    Returns:
        Delay in seconds, jittered and capped at retry_max_delay_ms.
    """
    base_delay = config.retry_base_delay_ms * (2**attempt)
    jitter = random.uniform(0, base_delay * 0.1)
    return min(base_delay + jitter, config.retry_max_delay_ms) / 1000


async def with_retries(
    func: Callable[[], Awaitable[T]],
    config: "ProviderConfig",
    retryable_errors: tuple[type[Exception], ...] = (TransientError, RateLimitError),
) -> T:
    """Execute function with exponential backoff retry.

    Args:
        func: Async function to execute (no arguments).
        config: Provider configuration with retry settings.
        retryable_errors: Tuple of error types that should trigger retry.

    Returns:
        Result from successful function execution.

    Raises:
        TransientError: If all retries exhausted due to transient failures.
        RateLimitError: If all retries exhausted due to rate limiting.

    Note:
        A RateLimitError carrying retry_after_seconds waits that long instead
        of the computed backoff.
    """
    attempt = 0
    while True:
        try:
            return await func()
        except retryable_errors as e:
            if attempt >= config.max_retries:
                raise

            if isinstance(e, RateLimitError) and e.retry_after_seconds:
                delay = e.retry_after_seconds
            else:
                delay = backoff_delay(attempt, config)

            logger.warning(
                "Provider error (attempt %d/%d): %s. Retrying in %.2fs",
                attempt + 1,
                config.max_retries + 1,
                e,
                delay,
            )

            await asyncio.sleep(delay)
            attempt += 1
