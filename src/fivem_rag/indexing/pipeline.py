"""
Ingestion pipeline: chunk, embed and store documents in batches.

Each batch of documents is chunked, embedded with a single batch request
and written to the vector store as one transaction. A batch that fails at
any step is counted as failed and the pipeline moves on to the next one,
so one bad batch never blocks or corrupts the rest.
"""

import asyncio
import time
import uuid
from typing import Callable, Sequence

from loguru import logger

from ..batch.progress import (
    BatchProgress,
    BatchStage,
    CallbackProgressReporter,
    ProgressCallback,
)
from ..chunker import WordWindowChunker
from ..config.models import IngestOptions
from ..embedder.base import BaseEmbedder
from ..entities.document import DocumentChunk, DocumentInput, DocumentMetadata
from ..entities.stats import IngestResult
from ..errors import FivemRAGError, IndexingError
from ..vector_store.base import BaseVectorStore

DEFAULT_MIN_CHUNK_CHARS = 50

# Rough lines-per-chunk used to offset the parent's line number hint
LINE_NUMBER_STRIDE = 10


class IndexingPipeline:
    """
    Batched document ingestion.

    Attributes:
        embedder: Embedding provider for chunk texts
        vector_store: Destination store
        min_chunk_chars: Chunks shorter than this (after trimming) are dropped before embedding

    Example:
        >>> pipeline = IndexingPipeline(embedder, store)
        >>> result = await pipeline.run(documents, IngestOptions(chunk_size=800, chunk_overlap=100))
        >>> result.processed_documents
        7
    """

    def __init__(
        self,
        embedder: BaseEmbedder,
        vector_store: BaseVectorStore,
        min_chunk_chars: int = DEFAULT_MIN_CHUNK_CHARS,
    ):
        self.embedder = embedder
        self.vector_store = vector_store
        self.min_chunk_chars = min_chunk_chars

    async def run(
        self,
        documents: Sequence[DocumentInput],
        options: IngestOptions,
        on_progress: ProgressCallback | None = None,
    ) -> IngestResult:
        """
        Ingest documents batch by batch.

        Args:
            documents: Validated input documents
            options: Chunking and batching parameters
            on_progress: Optional callback receiving BatchProgress updates

        Returns:
            Counts of processed and failed documents and stored chunks
        """
        request_id = uuid.uuid4().hex[:8]
        start_time = time.perf_counter()
        result = IngestResult()

        if not documents:
            logger.debug(f"[{request_id}] No documents to ingest")
            return result

        reporter = CallbackProgressReporter(on_progress) if on_progress else None
        chunker = WordWindowChunker(options.chunk_size, options.chunk_overlap)
        total_docs = len(documents)
        batch_size = options.batch_size
        total_batches = (total_docs + batch_size - 1) // batch_size

        logger.info(
            f"[{request_id}] Ingestion started: documents={total_docs}, "
            f"chunk_size={options.chunk_size}, chunk_overlap={options.chunk_overlap}, "
            f"batch_size={batch_size}"
        )

        for batch_idx in range(0, total_docs, batch_size):
            batch_num = batch_idx // batch_size + 1
            batch = documents[batch_idx:batch_idx + batch_size]

            def report(stage: BatchStage, message: str) -> None:
                if reporter:
                    reporter.report(BatchProgress.create(
                        stage=stage,
                        current=batch_idx,
                        total=total_docs,
                        message=message,
                        errors=result.failed_documents,
                        batch_num=batch_num,
                        total_batches=total_batches,
                    ))

            try:
                stored = await self._process_batch(batch, chunker, report, request_id, batch_num)
            except FivemRAGError as e:
                result.failed_documents += len(batch)
                logger.error(
                    f"[{request_id}] Batch {batch_num}/{total_batches} failed: "
                    f"{type(e).__name__}: {e}, doc_count={len(batch)}"
                )
                continue

            result.processed_documents += len(batch)
            result.total_chunks += stored

        if reporter:
            reporter.report(BatchProgress.create(
                stage=BatchStage.COMPLETE,
                current=total_docs,
                total=total_docs,
                message=(
                    f"Complete: {result.processed_documents} processed, "
                    f"{result.failed_documents} failed"
                ),
                errors=result.failed_documents,
                batch_num=total_batches,
                total_batches=total_batches,
            ))

        logger.info(
            f"[{request_id}] Ingestion complete: processed={result.processed_documents}/{total_docs}, "
            f"failed={result.failed_documents}, chunks={result.total_chunks}, "
            f"duration={time.perf_counter() - start_time:.2f}s"
        )
        return result

    async def _process_batch(
        self,
        batch: Sequence[DocumentInput],
        chunker: WordWindowChunker,
        report: Callable[[BatchStage, str], None],
        request_id: str,
        batch_num: int,
    ) -> int:
        """
        Chunk, embed and store one batch.

        Returns:
            Number of chunks written

        Raises:
            FivemRAGError: Store errors as raised; anything else wrapped in IndexingError
        """
        try:
            return await self._index_batch(batch, chunker, report, request_id, batch_num)
        except FivemRAGError:
            raise
        except Exception as e:
            raise IndexingError(
                f"Batch {batch_num} failed",
                details={"batch_num": batch_num, "doc_count": len(batch)},
                original_error=e,
            ) from e

    async def _index_batch(
        self,
        batch: Sequence[DocumentInput],
        chunker: WordWindowChunker,
        report: Callable[[BatchStage, str], None],
        request_id: str,
        batch_num: int,
    ) -> int:
        report(BatchStage.CHUNKING, f"Chunking batch {batch_num}")
        pending: list[tuple[str, DocumentMetadata]] = []
        for document in batch:
            pending.extend(self._chunk_document(document, chunker))

        if not pending:
            logger.debug(f"[{request_id}] Batch {batch_num} produced no chunks")
            return 0

        report(BatchStage.EMBEDDING, f"Embedding {len(pending)} chunks of batch {batch_num}")
        embeddings = await self.embedder.aembed_batch([text for text, _ in pending])

        chunks = [
            DocumentChunk(content=text, embedding=embedding, metadata=metadata)
            for (text, metadata), embedding in zip(pending, embeddings, strict=True)
        ]

        report(BatchStage.STORING, f"Storing {len(chunks)} chunks of batch {batch_num}")
        await asyncio.to_thread(self.vector_store.add_documents, chunks)

        logger.debug(f"[{request_id}] Batch {batch_num}: stored {len(chunks)} chunks from {len(batch)} documents")
        return len(chunks)

    def _chunk_document(
        self,
        document: DocumentInput,
        chunker: WordWindowChunker,
    ) -> list[tuple[str, DocumentMetadata]]:
        """Split one document and attach per-chunk metadata, dropping short chunks."""
        base_line = document.metadata.line_number
        pieces: list[tuple[str, DocumentMetadata]] = []

        for i, text in enumerate(chunker.split(document.content)):
            if len(text.strip()) < self.min_chunk_chars:
                continue

            metadata = document.metadata
            if base_line is not None:
                metadata = metadata.model_copy(update={"line_number": base_line + i * LINE_NUMBER_STRIDE})
            pieces.append((text, metadata))

        return pieces
