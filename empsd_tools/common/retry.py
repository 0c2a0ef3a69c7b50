# ================================================================================
# Retry Helpers
# ================================================================================
#
# Exponential-backoff retry for async callables. This is a collaborator of the
# page objects, not part of them: page operations only ever use the two-tier
# locator fallback, tests opt into retry explicitly.
#
# Usage:
#   title = await retry_async(lambda: page.title(), max_attempts=3)
#
#   @with_retry(RetryConfig(max_attempts=5, delay_ms=200))
#   async def open_dashboard(): ...
#
# ================================================================================

import asyncio
from functools import wraps
from typing import Awaitable, Callable, Optional, Tuple, Type, TypeVar

from loguru import logger


T = TypeVar("T")


class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(
        self,
        max_attempts: int = 3,
        delay_ms: int = 1000,
        backoff_multiplier: float = 2.0,
        retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    ):
        """
        Initialize retry configuration.

        Args:
            max_attempts: Maximum number of attempts (including the first)
            delay_ms: Delay before the second attempt, in milliseconds
            backoff_multiplier: Multiplier applied to the delay after each failure
            retry_on: Exception types that trigger another attempt
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.max_attempts = max_attempts
        self.delay_ms = delay_ms
        self.backoff_multiplier = backoff_multiplier
        self.retry_on = retry_on

    def delay_for(self, attempt: int) -> float:
        """Delay in seconds after failed attempt number `attempt` (0-based)."""
        return self.delay_ms * (self.backoff_multiplier ** attempt) / 1000


async def retry_async(
    fn: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    delay_ms: int = 1000,
    config: Optional[RetryConfig] = None,
) -> T:
    """
    Call `fn` until it succeeds or attempts run out; re-raise the last error.

    Delays grow as delay_ms * 2**attempt.
    """
    config = config or RetryConfig(max_attempts=max_attempts, delay_ms=delay_ms)
    name = getattr(fn, "__name__", "callable")

    attempt = 0
    while True:
        try:
            return await fn()
        except config.retry_on as e:
            if attempt + 1 >= config.max_attempts:
                logger.error(
                    f"All {config.max_attempts} attempts failed for {name}: {e}"
                )
                raise
            delay = config.delay_for(attempt)
            logger.warning(
                f"Attempt {attempt + 1}/{config.max_attempts} failed for "
                f"{name}: {e}. Retrying in {delay:.2f}s..."
            )
            await asyncio.sleep(delay)
            attempt += 1


def with_retry(config: RetryConfig = None):
    """
    Decorator form of `retry_async` for coroutine functions.

    Args:
        config: RetryConfig object for controlling retry behavior
    """
    if config is None:
        config = RetryConfig()

    def decorator(func: Callable[..., Awaitable[T]]):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            async def call():
                return await func(*args, **kwargs)

            call.__name__ = func.__name__
            return await retry_async(call, config=config)

        return wrapper
    return decorator


__all__ = [
    "RetryConfig",
    "retry_async",
    "with_retry",
]
