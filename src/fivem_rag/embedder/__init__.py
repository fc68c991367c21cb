"""Embedder module for vector generation.

This module provides embedding functionality with multiple
implementations and a factory for creating embedders.
"""

from .base import BaseEmbedder
from .factory import EmbedderFactory
from .fallback import fallback_embedding
from .providers.hashing import HashingEmbedder
from .providers.openai import OpenAIEmbedder

__all__ = [
    "BaseEmbedder",
    "EmbedderFactory",
    "HashingEmbedder",
    "OpenAIEmbedder",
    "fallback_embedding",
]
