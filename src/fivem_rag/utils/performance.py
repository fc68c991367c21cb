"""Performance monitoring utilities."""

import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from loguru import logger


@dataclass
class Timing:
    """Elapsed time of a ``timer`` block, filled in when the block exits."""

    operation: str
    elapsed_ms: float = 0.0


@contextmanager
def timer(operation: str, log_level: str = "INFO", threshold_ms: float = 0) -> Iterator[Timing]:
    """Context manager for timing operations.

    Args:
        operation: Description of the operation being timed
        log_level: Log level to use ("DEBUG", "INFO", "WARNING")
        threshold_ms: Only log if operation takes longer than this (in milliseconds)

    Yields:
        Timing record whose ``elapsed_ms`` is set once the block finishes

    Example:
        >>> with timer("Embedding 100 chunks") as t:
        ...     embeddings = embedder.embed_batch(texts)
        >>> t.elapsed_ms
        12.5
    """
    timing = Timing(operation=operation)
    start = time.perf_counter()
    try:
        yield timing
    finally:
        timing.elapsed_ms = (time.perf_counter() - start) * 1000

        if timing.elapsed_ms >= threshold_ms:
            log_func = getattr(logger, log_level.lower())
            log_func(f"{operation} took {timing.elapsed_ms:.2f}ms")
