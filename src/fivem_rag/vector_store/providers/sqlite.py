"""
SQLite-backed vector store.

Chunks live in a single ``documents`` table, with the embedding stored as a
little-endian float32 blob. Search is a filtered linear scan in insertion
order followed by cosine ranking in Python, which is adequate for the
thousands-of-chunks scale of a documentation knowledge base.

Features:
- Thread-safe operations with a reentrant lock
- Single reusable connection in WAL mode
- All-or-nothing batch writes (one transaction per ``add_documents`` call)
- Context manager support for proper resource cleanup

Example:
    >>> with SQLiteVectorStore("./data/vector.db", dimension=384) as store:
    ...     store.add_documents(chunks)
    ...     results = store.search(query_vector, top_k=5, framework="qbcore")
"""

import sqlite3
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence

from loguru import logger

from ...config.models import SearchOptions
from ...entities.document import DocumentChunk, DocumentMetadata
from ...entities.search_result import SearchResult
from ...entities.stats import StoreStats
from ...errors import VectorStoreError
from ..base import BaseVectorStore
from ..codec import decode_embedding, encode_embedding

_SCHEMA = """
CREATE TABLE IF NOT EXISTS documents (
    id TEXT PRIMARY KEY,
    content TEXT NOT NULL,
    embedding BLOB NOT NULL,
    source TEXT NOT NULL,
    framework TEXT NOT NULL,
    type TEXT NOT NULL,
    title TEXT,
    category TEXT,
    file_path TEXT,
    line_number INTEGER,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_documents_framework ON documents(framework);
CREATE INDEX IF NOT EXISTS idx_documents_type ON documents(type);
CREATE INDEX IF NOT EXISTS idx_documents_category ON documents(category);
CREATE INDEX IF NOT EXISTS idx_documents_source ON documents(source);
"""

_COLUMNS = (
    "id, content, embedding, source, framework, type, title, "
    "category, file_path, line_number, created_at"
)

# Filter fields map one-to-one onto columns
_FILTER_COLUMNS = ("framework", "type", "category", "source")


class SQLiteVectorStore(BaseVectorStore):
    """
    Persistent vector store using SQLite.

    Attributes:
        db_path: Path to the SQLite database file (":memory:" for a private in-process DB)
        timeout: Connection timeout in seconds
    """

    def __init__(self, db_path: str | Path = "data/vector.db", dimension: int = 1536, timeout: float = 30.0):
        """
        Initialize the store, creating the schema if needed.

        Args:
            db_path: Path to SQLite database file; parent directories are created
            dimension: Embedding length accepted on write
            timeout: Connection timeout in seconds

        Raises:
            VectorStoreError: If the database cannot be opened or initialized
        """
        super().__init__(dimension)
        self.db_path = str(db_path)
        self.timeout = timeout
        self._lock = threading.RLock()
        self._closed = False

        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        try:
            self._connection = sqlite3.connect(
                self.db_path,
                timeout=self.timeout,
                check_same_thread=False,  # guarded by self._lock
            )
            self._connection.execute("PRAGMA journal_mode=WAL")
            self._connection.executescript(_SCHEMA)
            self._connection.commit()
        except sqlite3.Error as e:
            raise VectorStoreError(
                f"Failed to open vector database at {self.db_path}: {e}",
                details={"db_path": self.db_path},
                original_error=e,
            ) from e

        logger.info(f"SQLiteVectorStore initialized: {self.db_path} (dimension={dimension})")

    def _check_closed(self) -> None:
        if self._closed:
            raise VectorStoreError(
                "Cannot perform operation: SQLiteVectorStore connection has been closed. "
                "Create a new SQLiteVectorStore instance to continue."
            )

    def add_documents(self, chunks: Sequence[DocumentChunk]) -> list[str]:
        self._check_closed()
        if not chunks:
            return []

        self._validate_chunks(chunks)

        now = datetime.now(timezone.utc).isoformat()
        rows = [
            (
                chunk.id,
                chunk.content,
                encode_embedding(chunk.embedding),
                chunk.metadata.source,
                chunk.metadata.framework,
                chunk.metadata.type,
                chunk.metadata.title,
                chunk.metadata.category,
                chunk.metadata.file_path,
                chunk.metadata.line_number,
                (chunk.created_at.isoformat() if chunk.created_at else now),
            )
            for chunk in chunks
        ]

        try:
            with self._lock, self._connection:
                self._connection.executemany(
                    f"INSERT OR REPLACE INTO documents ({_COLUMNS}) "
                    f"VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                    rows,
                )
        except sqlite3.Error as e:
            raise VectorStoreError(
                f"Failed to write {len(rows)} chunks: {e}",
                details={"chunk_count": len(rows)},
                original_error=e,
            ) from e

        logger.debug(f"Stored {len(rows)} chunks")
        return [chunk.id for chunk in chunks]

    def search(
        self,
        query_vector: Sequence[float],
        options: SearchOptions | dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> list[SearchResult]:
        self._check_closed()
        opts = self._resolve_options(query_vector, options, kwargs)

        filters = opts.filters()
        where = " AND ".join(f"{col} = ?" for col in _FILTER_COLUMNS if col in filters)
        params = [filters[col] for col in _FILTER_COLUMNS if col in filters]
        sql = f"SELECT {_COLUMNS} FROM documents"
        if where:
            sql += f" WHERE {where}"
        sql += " ORDER BY rowid"

        try:
            with self._lock:
                rows = self._connection.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise VectorStoreError(f"Search query failed: {e}", original_error=e) from e

        ranked = self._rank(
            ((row, row[0], self._decode(row[2])) for row in rows),
            query_vector,
            opts,
        )
        return [self._row_to_result(row, score) for row, score in ranked]

    def get_stats(self) -> StoreStats:
        self._check_closed()
        try:
            with self._lock:
                total = self._connection.execute("SELECT COUNT(*) FROM documents").fetchone()[0]
                grouped = {
                    column: dict(
                        self._connection.execute(
                            f"SELECT {column}, COUNT(*) FROM documents "
                            f"WHERE {column} IS NOT NULL GROUP BY {column}"
                        ).fetchall()
                    )
                    for column in _FILTER_COLUMNS
                }
        except sqlite3.Error as e:
            raise VectorStoreError(f"Failed to compute stats: {e}", original_error=e) from e

        return StoreStats(
            total_documents=total,
            frameworks=grouped["framework"],
            types=grouped["type"],
            categories=grouped["category"],
            sources=grouped["source"],
        )

    def delete_by_source(self, source: str) -> int:
        self._check_closed()
        try:
            with self._lock, self._connection:
                cursor = self._connection.execute("DELETE FROM documents WHERE source = ?", (source,))
        except sqlite3.Error as e:
            raise VectorStoreError(
                f"Failed to delete source '{source}': {e}",
                details={"source": source},
                original_error=e,
            ) from e

        logger.info(f"Deleted {cursor.rowcount} chunks from source '{source}'")
        return cursor.rowcount

    def clear(self) -> None:
        self._check_closed()
        try:
            with self._lock, self._connection:
                self._connection.execute("DELETE FROM documents")
        except sqlite3.Error as e:
            raise VectorStoreError(f"Failed to clear vector store: {e}", original_error=e) from e
        logger.info("Cleared vector store")

    def count(self) -> int:
        self._check_closed()
        try:
            with self._lock:
                return self._connection.execute("SELECT COUNT(*) FROM documents").fetchone()[0]
        except sqlite3.Error as e:
            raise VectorStoreError(f"Failed to count documents: {e}", original_error=e) from e


    def close(self) -> None:
        """Close the database connection. Safe to call more than once."""
        with self._lock:
            if not self._closed:
                self._connection.close()
                self._closed = True
                logger.debug(f"SQLiteVectorStore closed: {self.db_path}")

    def __del__(self):
        # The connection may never have been opened if __init__ failed
        if hasattr(self, "_connection"):
            try:
                self.close()
            except sqlite3.Error:
                pass

    @staticmethod
    def _decode(blob: bytes) -> list[float] | None:
        try:
            return decode_embedding(blob)
        except ValueError:
            return None

    @staticmethod
    def _row_to_result(row: tuple, score: float) -> SearchResult:
        (_, content, blob, source, framework, doc_type,
         title, category, file_path, line_number, created_at) = row
        return SearchResult(
            content=content,
            embedding=decode_embedding(blob),
            metadata=DocumentMetadata(
                source=source,
                framework=framework,
                type=doc_type,
                title=title,
                category=category,
                file_path=file_path,
                line_number=line_number,
            ),
            created_at=datetime.fromisoformat(created_at) if created_at else None,
            score=score,
        )
