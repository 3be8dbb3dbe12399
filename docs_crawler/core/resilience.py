"""
Retry with exponential backoff for transient failures.
"""

import asyncio
import functools
import logging
import random
from collections.abc import Awaitable, Callable
from typing import TypeVar

from ..config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


def exponential_backoff(
    max_retries: int | None = None,
    initial_delay: float | None = None,
    max_delay: float | None = None,
    exponential_base: float | None = None,
    jitter: bool = True,
    exceptions: tuple[type[Exception], ...] | None = None,
):
    """
    Decorator for exponential backoff retry logic on coroutines.

    Args:
        max_retries: Maximum number of attempts
        initial_delay: Initial delay in seconds
        max_delay: Maximum delay in seconds
        exponential_base: Base for exponential calculation
        jitter: Add randomization to prevent thundering herd
        exceptions: Tuple of exceptions to retry on (None = all)
    """
    max_retries = max_retries or settings.fetch_max_retries
    if initial_delay is None:
        initial_delay = settings.retry_initial_delay
    if max_delay is None:
        max_delay = settings.retry_max_delay
    exponential_base = exponential_base or settings.retry_exponential_base
    exceptions = exceptions or (Exception,)

    def decorator(
        func: Callable[..., Awaitable[T]],
    ) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            for attempt in range(max_retries):
                try:
                    return await func(*args, **kwargs)

                except exceptions as e:
                    if attempt == max_retries - 1:
                        logger.debug(
                            f"'{func.__name__}' failed after {max_retries} attempts: {e}"
                        )
                        raise

                    delay = min(initial_delay * (exponential_base**attempt), max_delay)
                    if jitter:
                        delay *= 0.5 + random.random()

                    logger.info(
                        f"'{func.__name__}' failed (attempt {attempt + 1}/{max_retries}), "
                        f"retrying in {delay:.2f}s: {e}"
                    )
                    await asyncio.sleep(delay)

            raise RuntimeError(f"Unexpected retry logic error in {func.__name__}")

        return wrapper

    return decorator
