"""Base chunker interface."""

from abc import ABC, abstractmethod


class BaseChunker(ABC):
    """Abstract base class for text chunking.

    Chunkers split raw document text into smaller pieces suitable
    for embedding and retrieval. They are stateless: splitting the same
    text twice yields the same chunks.
    """

    @abstractmethod
    def split(self, content: str) -> list[str]:
        """Split document text into chunks.

        Args:
            content: Raw document text

        Returns:
            Ordered list of non-empty chunk texts
        """
        pass
