"""Local feature-hashing embedder (no external API)."""

import re

import numpy as np
from loguru import logger

from ...utils.hashing import fnv1a_32
from ..base import BaseEmbedder
from ..fallback import fallback_embedding

_TOKEN_PATTERN = re.compile(r"[a-z0-9_]+")


class HashingEmbedder(BaseEmbedder):
    """Bag-of-words embedder using the hashing trick.

    Each lower-cased token increments one bucket chosen by its FNV-1a hash.
    All components are non-negative, so texts sharing any token score
    above zero and unrelated texts score zero (barring collisions).

    NOTE: Lexical only. Use it offline, in tests, or when no embedding API
    is configured; it is not a substitute for a semantic model.

    Attributes:
        dimension: Embedding vector dimension
    """

    def __init__(self, dimension: int = 384):
        """Initialize the hashing embedder.

        Args:
            dimension: Size of embedding vectors
        """
        if dimension <= 0:
            raise ValueError("dimension must be positive")
        self._dimension = dimension
        logger.debug(f"Initialized HashingEmbedder (dimension={dimension})")

    @property
    def dimension(self) -> int:
        """Return the embedding dimension."""
        return self._dimension

    def _generate(self, texts: list[str]) -> list[list[float]]:
        return [self._vectorize(text) for text in texts]

    def _vectorize(self, text: str) -> list[float]:
        tokens = _TOKEN_PATTERN.findall(text.lower())
        if not tokens:
            return fallback_embedding(text, self._dimension)

        vector = np.zeros(self._dimension, dtype=np.float64)
        for token in tokens:
            vector[fnv1a_32(token) % self._dimension] += 1.0

        return (vector / np.linalg.norm(vector)).tolist()
