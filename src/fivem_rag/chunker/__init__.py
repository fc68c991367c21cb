"""Chunker module for text splitting.

This module provides the word-window chunker used by ingestion.
"""

from .base import BaseChunker
from .providers.word_window import WordWindowChunker

__all__ = ["BaseChunker", "WordWindowChunker"]
