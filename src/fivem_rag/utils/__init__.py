"""Utility functions for fivem-rag."""

from .hashing import content_id, fnv1a_32
from .logging import setup_logging
from .performance import Timing, timer
from .similarity import cosine_similarity

__all__ = [
    "content_id",
    "fnv1a_32",
    "cosine_similarity",
    "setup_logging",
    "timer",
    "Timing",
]
