"""Base embedder interface."""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from loguru import logger

from ..errors import EmbeddingError
from .fallback import fallback_embedding


@dataclass(frozen=True)
class _Embedded:
    vectors: list[list[float]]


@dataclass(frozen=True)
class _Failed:
    error: Exception


def normalize_text(text: str) -> str:
    """Collapse newlines and trim, as sent to embedding models."""
    return text.replace("\n", " ").strip()


class BaseEmbedder(ABC):
    """Abstract base class for embedding generation.

    Embedders convert text strings into vectors of a fixed ``dimension``.
    The public methods never raise for provider failures: when the
    concrete ``_generate`` call fails, or returns vectors of the wrong
    shape, every text in the request is mapped to its deterministic
    fallback vector instead.
    """

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Return the embedding dimension.

        Returns:
            Size of embedding vectors produced by this embedder
        """
        pass

    @abstractmethod
    def _generate(self, texts: list[str]) -> list[list[float]]:
        """Call the underlying model for already-normalised texts.

        Args:
            texts: Non-empty list of text strings

        Returns:
            One vector per text, same order as input

        Raises:
            Exception: Any provider failure; handled by the caller
        """
        pass

    def embed(self, text: str) -> list[float]:
        """Embed a single text."""
        return self.embed_batch([text])[0]

    def embed_batch(self, texts: Sequence[str]) -> list[list[float]]:
        """Embed texts in one provider request.

        Args:
            texts: Text strings to embed

        Returns:
            List of embedding vectors (same order and length as input)
        """
        texts = list(texts)
        if not texts:
            return []

        outcome = self._attempt([normalize_text(text) for text in texts])
        if isinstance(outcome, _Embedded):
            return outcome.vectors

        logger.warning(
            f"{type(self).__name__} failed for {len(texts)} texts, "
            f"using fallback vectors: {type(outcome.error).__name__}: {outcome.error}"
        )
        return [fallback_embedding(text, self.dimension) for text in texts]

    async def aembed(self, text: str) -> list[float]:
        """Embed a single text without blocking the event loop."""
        return await asyncio.to_thread(self.embed, text)

    async def aembed_batch(self, texts: Sequence[str]) -> list[list[float]]:
        """Embed texts without blocking the event loop."""
        return await asyncio.to_thread(self.embed_batch, list(texts))

    def _attempt(self, texts: list[str]) -> _Embedded | _Failed:
        try:
            vectors = self._generate(texts)
        except Exception as e:
            return _Failed(e)

        if len(vectors) != len(texts):
            return _Failed(EmbeddingError(
                f"Provider returned {len(vectors)} vectors for {len(texts)} texts"
            ))
        for vector in vectors:
            if len(vector) != self.dimension:
                return _Failed(EmbeddingError(
                    f"Provider returned a {len(vector)}-d vector, expected {self.dimension}"
                ))

        return _Embedded([list(map(float, vector)) for vector in vectors])
