"""
Batch progress reporting.

Example:
    >>> from fivem_rag.batch import BatchProgress
    >>> await engine.ingest_documents(docs, on_progress=lambda p: print(p.message))
"""

from .progress import (
    BatchProgress,
    BatchStage,
    CallbackProgressReporter,
    LoggingProgressReporter,
    ProgressCallback,
    ProgressReporter,
)

__all__ = [
    "BatchProgress",
    "BatchStage",
    "CallbackProgressReporter",
    "LoggingProgressReporter",
    "ProgressCallback",
    "ProgressReporter",
]
