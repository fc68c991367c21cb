"""Base vector store interface."""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Sequence, TypeVar

from loguru import logger

from ..config.models import SearchOptions, merge_options
from ..entities.document import DocumentChunk
from ..entities.search_result import SearchResult
from ..entities.stats import StoreStats
from ..errors import ValidationError
from ..utils.similarity import cosine_similarity

R = TypeVar("R")


class BaseVectorStore(ABC):
    """Abstract base class for chunk storage and similarity search.

    Records are keyed by the content-derived chunk ID and are only ever
    inserted or replaced wholesale. Search is a filtered linear scan
    followed by cosine ranking; no index is assumed.

    Records whose stored embedding length differs from the query vector
    (for instance after switching embedding models) are skipped with a
    warning rather than failing the search.
    """

    def __init__(self, dimension: int):
        if dimension <= 0:
            raise ValidationError("dimension must be positive", details={"dimension": dimension})
        self._dimension = dimension

    @property
    def dimension(self) -> int:
        """Embedding length accepted by this store."""
        return self._dimension

    def add_document(self, chunk: DocumentChunk) -> str:
        """Insert or replace a single chunk.

        Args:
            chunk: Chunk with an embedding of length ``dimension``

        Returns:
            The chunk ID (content hash)
        """
        return self.add_documents([chunk])[0]

    @abstractmethod
    def add_documents(self, chunks: Sequence[DocumentChunk]) -> list[str]:
        """Insert or replace chunks as one all-or-nothing write.

        Args:
            chunks: Chunks with embeddings

        Returns:
            Chunk IDs in input order

        Raises:
            ValidationError: If any chunk is invalid (nothing is written)
            VectorStoreError: If the backend write fails (nothing is written)
        """
        pass

    @abstractmethod
    def search(
        self,
        query_vector: Sequence[float],
        options: SearchOptions | dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> list[SearchResult]:
        """Rank stored chunks against a query vector.

        Args:
            query_vector: Query embedding of length ``dimension``
            options: SearchOptions (or a mapping of its fields)
            **kwargs: Individual option fields (top_k, framework, ...)

        Returns:
            At most ``top_k`` results, non-increasing in score, none below ``min_score``
        """
        pass

    @abstractmethod
    def get_stats(self) -> StoreStats:
        """Count stored chunks in total and grouped by metadata field."""
        pass

    @abstractmethod
    def delete_by_source(self, source: str) -> int:
        """Delete every chunk tagged with ``source``.

        Returns:
            Number of chunks removed
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove all chunks."""
        pass

    @abstractmethod
    def count(self) -> int:
        """Get the total number of chunks in this store."""
        pass

    def close(self) -> None:
        """Release backend resources. No-op by default."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    def _validate_chunks(self, chunks: Sequence[DocumentChunk]) -> None:
        """Reject the whole batch if any chunk cannot be stored."""
        for chunk in chunks:
            if len(chunk.embedding) != self._dimension:
                raise ValidationError(
                    f"Chunk {chunk.id} has a {len(chunk.embedding)}-d embedding, "
                    f"store expects {self._dimension}",
                    details={"constraint": "len(embedding) == dimension", "chunk_id": chunk.id},
                )
            for tag in ("source", "framework", "type"):
                if not getattr(chunk.metadata, tag, None):
                    raise ValidationError(
                        f"Chunk {chunk.id} has an empty '{tag}' tag",
                        details={"constraint": f"non-empty {tag}", "chunk_id": chunk.id},
                    )

    def _resolve_options(
        self,
        query_vector: Sequence[float],
        options: SearchOptions | dict[str, Any] | None,
        kwargs: dict[str, Any],
    ) -> SearchOptions:
        resolved = merge_options(SearchOptions, options, kwargs)

        if len(query_vector) != self._dimension:
            raise ValidationError(
                f"Query vector has {len(query_vector)} dimensions, store expects {self._dimension}",
                details={"constraint": "len(query_vector) == dimension"},
            )
        return resolved

    def _rank(
        self,
        candidates: Iterable[tuple[R, str, Sequence[float] | None]],
        query_vector: Sequence[float],
        options: SearchOptions,
    ) -> list[tuple[R, float]]:
        """Score, filter, sort and truncate scan candidates.

        Args:
            candidates: ``(record, chunk_id, embedding)`` in scan order;
                ``embedding`` is None when it could not be decoded
            query_vector: Query embedding
            options: Resolved search options

        Returns:
            ``(record, score)`` pairs, best first, at most ``top_k``
        """
        scored: list[tuple[R, float]] = []
        skipped = 0

        for record, chunk_id, embedding in candidates:
            if embedding is None or len(embedding) != len(query_vector):
                skipped += 1
                logger.warning(
                    f"Skipping chunk {chunk_id}: stored embedding has "
                    f"{'no valid' if embedding is None else len(embedding)} dimensions, "
                    f"query has {len(query_vector)}"
                )
                continue

            score = cosine_similarity(query_vector, embedding)
            if score >= options.min_score:
                scored.append((record, score))

        # list.sort is stable, so equal scores keep scan order
        scored.sort(key=lambda item: item[1], reverse=True)

        logger.debug(
            f"Ranked {len(scored)} candidates (skipped={skipped}), "
            f"returning top {options.top_k}"
        )
        return scored[:options.top_k]
