"""Word-window chunker implementation."""

from typing import Iterator

from loguru import logger

from ...errors import ValidationError
from ..base import BaseChunker


class WordWindowChunker(BaseChunker):
    """Chunks text into overlapping windows of whitespace-separated words.

    Starting at word 0, each window takes ``chunk_size`` words and the next
    window starts ``chunk_size - chunk_overlap`` words later. Splitting stops
    once a window reaches the last word, so a document of at most
    ``chunk_size`` words yields exactly one chunk.

    Attributes:
        chunk_size: Words per chunk
        chunk_overlap: Words repeated from the tail of the previous chunk
    """

    def __init__(self, chunk_size: int = 1000, chunk_overlap: int = 200):
        """Initialize the chunker.

        Args:
            chunk_size: Words per chunk
            chunk_overlap: Words to overlap between chunks

        Raises:
            ValidationError: If chunk_size <= 0 or overlap not in [0, chunk_size)
        """
        if chunk_size <= 0:
            raise ValidationError(
                "chunk_size must be positive",
                details={"constraint": "chunk_size > 0", "chunk_size": chunk_size},
            )
        if chunk_overlap < 0 or chunk_overlap >= chunk_size:
            raise ValidationError(
                "chunk_overlap must be in [0, chunk_size)",
                details={
                    "constraint": "0 <= chunk_overlap < chunk_size",
                    "chunk_size": chunk_size,
                    "chunk_overlap": chunk_overlap,
                },
            )

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    @property
    def step(self) -> int:
        """Words between the starts of consecutive windows."""
        return self.chunk_size - self.chunk_overlap

    def split(self, content: str) -> list[str]:
        """Split text into word windows.

        Args:
            content: Raw document text

        Returns:
            Chunk texts, each rejoined with single spaces
        """
        chunks = list(self.iter_chunks(content))
        logger.debug(
            f"Split {len(content)} chars into {len(chunks)} chunks "
            f"(size={self.chunk_size}, overlap={self.chunk_overlap})"
        )
        return chunks

    def iter_chunks(self, content: str) -> Iterator[str]:
        """Lazily yield the word windows of ``content``."""
        words = content.split()

        for start in range(0, len(words), self.step):
            end = start + self.chunk_size
            chunk = " ".join(words[start:end]).strip()
            if chunk:
                yield chunk
            if end >= len(words):
                break
