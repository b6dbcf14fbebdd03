"""
Retry with exponential backoff and jitter for outbound service calls.

Only used by the assistant services; the calculation never retries.
"""

import asyncio
import functools
import logging
import random
from typing import Awaitable, Callable, Optional, Tuple, Type

import httpx

logger = logging.getLogger(__name__)

# Transient failures: transport errors and non-2xx statuses (429 included)
RETRYABLE_ERRORS: Tuple[Type[BaseException], ...] = (httpx.HTTPError,)


def backoff_delay(
    attempt: int,
    base_delay: float = 1.0,
    jitter: float = 1.0,
    random_fn: Callable[[], float] = random.random,
) -> float:
    """Delay before retry number attempt + 1: base * 2^attempt + uniform(0, jitter)"""
    return base_delay * (2 ** attempt) + random_fn() * jitter


def retry_with_backoff(
    max_attempts: int = 3,
    base_delay: float = 1.0,
    jitter: float = 1.0,
    retry_on: Tuple[Type[BaseException], ...] = RETRYABLE_ERRORS,
    sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    random_fn: Callable[[], float] = random.random,
):
    """
    Decorate a coroutine function so failures are retried.

    Args:
        max_attempts: Total attempts including the first (>= 1)
        base_delay: Delay in seconds before the first retry, doubled each time
        jitter: Upper bound of the random delay added to each wait
        retry_on: Exception types that trigger a retry; others propagate at once
        sleep: Awaitable sleep, asyncio.sleep by default
        random_fn: Source of jitter in [0, 1)

    The last error is re-raised once the attempts are used up.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            for attempt in range(max_attempts):
                try:
                    return await func(*args, **kwargs)
                except retry_on as e:
                    if attempt == max_attempts - 1:
                        logger.warning(f"{func.__name__} failed after {max_attempts} attempts: {e}")
                        raise
                    delay = backoff_delay(attempt, base_delay, jitter, random_fn)
                    logger.warning(
                        f"{func.__name__} attempt {attempt + 1}/{max_attempts} failed ({e}); "
                        f"retrying in {delay:.2f}s"
                    )
                    await (sleep or asyncio.sleep)(delay)
        return wrapper

    return decorator
