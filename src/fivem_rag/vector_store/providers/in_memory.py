"""Process-local vector store, for tests and ephemeral knowledge bases."""

import threading
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Sequence

from loguru import logger

from ...config.models import SearchOptions
from ...entities.document import DocumentChunk
from ...entities.search_result import SearchResult
from ...entities.stats import StoreStats
from ..base import BaseVectorStore


class InMemoryVectorStore(BaseVectorStore):
    """
    Dictionary-backed vector store.

    Records are kept in insertion order; replacing a record moves it to
    the end, matching the SQLite store's scan order.
    """

    def __init__(self, dimension: int = 1536):
        super().__init__(dimension)
        self._records: dict[str, DocumentChunk] = {}
        self._lock = threading.RLock()
        logger.debug(f"InMemoryVectorStore initialized (dimension={dimension})")

    def add_documents(self, chunks: Sequence[DocumentChunk]) -> list[str]:
        if not chunks:
            return []
        # Validation runs before any mutation, so a bad batch writes nothing
        self._validate_chunks(chunks)

        now = datetime.now(timezone.utc)
        with self._lock:
            for chunk in chunks:
                self._records.pop(chunk.id, None)
                self._records[chunk.id] = chunk.model_copy(
                    update={"created_at": chunk.created_at or now},
                    deep=True,
                )

        return [chunk.id for chunk in chunks]

    def search(
        self,
        query_vector: Sequence[float],
        options: SearchOptions | dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> list[SearchResult]:
        opts = self._resolve_options(query_vector, options, kwargs)
        filters = opts.filters()

        with self._lock:
            candidates = [
                chunk for chunk in self._records.values()
                if all(getattr(chunk.metadata, key) == value for key, value in filters.items())
            ]

        ranked = self._rank(
            ((chunk, chunk.id, chunk.embedding) for chunk in candidates),
            query_vector,
            opts,
        )
        return [
            SearchResult(**chunk.model_dump(exclude={"id"}), score=score)
            for chunk, score in ranked
        ]

    def get_stats(self) -> StoreStats:
        with self._lock:
            chunks = list(self._records.values())

        return StoreStats(
            total_documents=len(chunks),
            frameworks=dict(Counter(c.metadata.framework for c in chunks)),
            types=dict(Counter(c.metadata.type for c in chunks)),
            categories=dict(Counter(c.metadata.category for c in chunks if c.metadata.category is not None)),
            sources=dict(Counter(c.metadata.source for c in chunks)),
        )

    def delete_by_source(self, source: str) -> int:
        with self._lock:
            doomed = [key for key, chunk in self._records.items() if chunk.metadata.source == source]
            for key in doomed:
                del self._records[key]

        logger.info(f"Deleted {len(doomed)} chunks from source '{source}'")
        return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def count(self) -> int:
        return len(self._records)
