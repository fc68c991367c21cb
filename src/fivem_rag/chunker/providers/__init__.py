"""Provider implementations for chunkers."""

from .word_window import WordWindowChunker

__all__ = ["WordWindowChunker"]
