"""
Exponential backoff for calls to the embedding API.

``call_with_retry`` re-invokes a function while it raises a
``RetryableError`` (rate limits, 5xx responses, dropped connections).
Permanent errors and anything outside the fivem-rag hierarchy propagate
on the first failure; the embedder's fallback branch handles them.

Usage:
------
    from fivem_rag.utils.retry import RetryConfig, call_with_retry

    vectors = call_with_retry(post_batch, texts, config=RetryConfig(max_attempts=4))
"""

import random
import time
from dataclasses import dataclass
from typing import Callable, TypeVar

from loguru import logger

from fivem_rag.errors import RetryableError

T = TypeVar("T")


@dataclass(frozen=True)
class RetryConfig:
    """
    Backoff policy.

    Attributes:
        max_attempts: Calls made in total, including the first
        base_delay: Wait before the second call (seconds); doubles for each later call
        max_delay: Upper bound on any single wait, including a server's Retry-After
        jitter: Random spread applied to each wait, as a fraction of it
    """

    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 60.0
    jitter: float = 0.1

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0:
            raise ValueError("base_delay must be non-negative")
        if self.max_delay < self.base_delay:
            raise ValueError("max_delay must be >= base_delay")
        if not 0 <= self.jitter <= 1:
            raise ValueError("jitter must be between 0 and 1")


def backoff_delay(attempt: int, config: RetryConfig, error: RetryableError | None = None) -> float:
    """Seconds to wait after the given failed attempt (1-based).

    A positive ``retry_after`` on the error wins over the computed value.
    """
    if error is not None and error.retry_after and error.retry_after > 0:
        return min(error.retry_after, config.max_delay)

    delay = config.base_delay * 2 ** (attempt - 1)
    if config.jitter:
        delay *= 1 + random.uniform(-config.jitter, config.jitter)
    return max(0.0, min(delay, config.max_delay))


def call_with_retry(fn: Callable[..., T], *args, config: RetryConfig) -> T:
    """Call ``fn(*args)``, retrying retryable failures with backoff.

    Raises:
        RetryableError: The last failure once ``max_attempts`` is used up
        Exception: Any non-retryable failure, unchanged
    """
    attempt = 1
    while True:
        try:
            return fn(*args)
        except RetryableError as e:
            if attempt >= config.max_attempts:
                logger.debug(f"{fn.__name__}: giving up after {attempt} attempt(s): {e}")
                raise
            delay = backoff_delay(attempt, config, e)
            logger.warning(
                f"{fn.__name__} failed ({type(e).__name__}), "
                f"retry {attempt}/{config.max_attempts - 1} in {delay:.2f}s"
            )
            time.sleep(delay)
            attempt += 1
