"""
Progress tracking for ingestion batches.

Ingestion reports one update per stage per batch, so callers can drive a
progress bar, a log line, or a websocket message without the pipeline
knowing which.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol

from loguru import logger


class BatchStage(Enum):
    """Stages of ingestion."""
    CHUNKING = "chunking"
    EMBEDDING = "embedding"
    STORING = "storing"
    COMPLETE = "complete"


@dataclass
class BatchProgress:
    """
    Progress information for one ingestion update.

    Attributes:
        stage: Current processing stage
        current: Documents handled so far
        total: Total documents in the call
        percent: Completion ratio (0.0 to 1.0)
        message: Human-readable progress message
        errors: Documents counted as failed so far
        batch_num: Current batch number (1-indexed)
        total_batches: Total number of batches

    Example:
        >>> progress = BatchProgress.create(BatchStage.EMBEDDING, 5, 10, batch_num=2, total_batches=4)
        >>> print(f"{progress.percent:.0%} - {progress.message}")
        50% - embedding: 5/10
    """

    stage: BatchStage
    current: int
    total: int
    percent: float
    message: str
    errors: int = 0
    batch_num: int = 0
    total_batches: int = 0

    @classmethod
    def create(
        cls,
        stage: BatchStage,
        current: int,
        total: int,
        message: str = "",
        errors: int = 0,
        batch_num: int = 0,
        total_batches: int = 0
    ) -> "BatchProgress":
        """Create a BatchProgress with ``percent`` derived from current/total."""
        percent = current / total if total > 0 else 0.0
        return cls(
            stage=stage,
            current=current,
            total=total,
            percent=percent,
            message=message or f"{stage.value}: {current}/{total}",
            errors=errors,
            batch_num=batch_num,
            total_batches=total_batches
        )


ProgressCallback = Callable[[BatchProgress], None]


class ProgressReporter(Protocol):
    """Protocol for progress reporting implementations."""

    def report(self, progress: BatchProgress) -> None:
        ...


class LoggingProgressReporter:
    """
    Progress reporter that writes to the loguru logger.

    Used by the ingest CLI where a progress bar isn't appropriate.
    """

    def __init__(self, level: str = "INFO"):
        self.level = level

    def report(self, progress: BatchProgress) -> None:
        logger.log(
            self.level,
            f"{progress.stage.value}: {progress.current}/{progress.total} "
            f"({progress.percent:.1%})"
            + (f" [errors: {progress.errors}]" if progress.errors else "")
        )

    def __call__(self, progress: BatchProgress) -> None:
        self.report(progress)


class CallbackProgressReporter:
    """Progress reporter that forwards to a user-provided callback.

    Exceptions raised by the callback are logged and do not reach the
    pipeline.
    """

    def __init__(self, callback: ProgressCallback):
        self.callback = callback

    def report(self, progress: BatchProgress) -> None:
        try:
            self.callback(progress)
        except Exception as e:
            logger.warning(f"Progress callback raised {type(e).__name__}: {e}")
