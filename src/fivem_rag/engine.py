"""RAG Engine - High-level orchestrator for ingestion and retrieval."""

import asyncio
from typing import Any, Iterable

from loguru import logger

from .batch.progress import ProgressCallback
from .config.models import MAX_QUERY_LENGTH, IngestOptions, SearchOptions, merge_options, parse_model
from .config.settings import Settings
from .config.settings import settings as default_settings
from .embedder.base import BaseEmbedder
from .embedder.factory import EmbedderFactory
from .entities.document import DocumentInput
from .entities.search_result import RAGContext
from .entities.stats import IngestResult, StoreStats
from .errors import ConfigurationError, ValidationError
from .indexing import IndexingPipeline
from .prompt import generate_context_prompt
from .utils.performance import timer
from .vector_store.base import BaseVectorStore
from .vector_store.factory import VectorStoreFactory


class RAGEngine:
    """High-level orchestrator for RAG operations.

    Composes a chunker, an embedder and a vector store into the public
    operations used by the surrounding application: ingest, search,
    statistics, deletion and context formatting.

    The store and embedder are injected; use ``create_engine`` to build
    them from settings.

    Attributes:
        vector_store: Chunk storage and similarity search
        embedder: Embedding provider shared by ingestion and search
        indexing_pipeline: Batched chunk -> embed -> store pipeline

    Example:
        >>> engine = RAGEngine(InMemoryVectorStore(dimension=384), HashingEmbedder(dimension=384))
        >>> await engine.ingest_documents(docs, chunk_size=800, chunk_overlap=100)
        >>> context = await engine.search("how do I wait in a loop", top_k=3)
        >>> prompt = engine.generate_context_prompt(context, "how do I wait in a loop")
    """

    def __init__(self, vector_store: BaseVectorStore, embedder: BaseEmbedder, min_chunk_chars: int = 50):
        """Initialize the engine.

        Args:
            vector_store: Destination and search backend
            embedder: Embedding provider
            min_chunk_chars: Chunks shorter than this are not indexed

        Raises:
            ConfigurationError: If store and embedder dimensions differ
        """
        if vector_store.dimension != embedder.dimension:
            raise ConfigurationError(
                f"Vector store expects {vector_store.dimension}-d embeddings "
                f"but {type(embedder).__name__} produces {embedder.dimension}-d",
                details={"store_dimension": vector_store.dimension, "embedder_dimension": embedder.dimension},
            )

        self.vector_store = vector_store
        self.embedder = embedder
        self.indexing_pipeline = IndexingPipeline(embedder, vector_store, min_chunk_chars=min_chunk_chars)

        logger.info(
            f"RAG Engine initialized: store={type(vector_store).__name__}, "
            f"embedder={type(embedder).__name__}, dimension={embedder.dimension}"
        )

    async def ingest_documents(
        self,
        documents: Iterable[DocumentInput | dict[str, Any]],
        options: IngestOptions | dict[str, Any] | None = None,
        on_progress: ProgressCallback | None = None,
        **kwargs: Any,
    ) -> IngestResult:
        """Chunk, embed and store documents.

        Failures inside a batch are counted in ``failed_documents``; they
        never abort the call.

        Args:
            documents: DocumentInput instances or mappings with ``content`` and ``metadata``
            options: IngestOptions (or mapping); keyword arguments override fields
            on_progress: Optional callback receiving BatchProgress updates
            **kwargs: chunk_size, chunk_overlap, batch_size

        Returns:
            Counts of processed/failed documents and stored chunks

        Raises:
            ValidationError: If options or any document are invalid (nothing is written)
        """
        opts = merge_options(IngestOptions, options, kwargs)
        inputs = [parse_model(DocumentInput, document) for document in documents]
        return await self.indexing_pipeline.run(inputs, opts, on_progress)

    async def search(
        self,
        query: str,
        options: SearchOptions | dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> RAGContext:
        """Embed a query and rank stored chunks against it.

        Args:
            query: Query text, 1 to 500 characters
            options: SearchOptions (or mapping); keyword arguments override fields
            **kwargs: top_k, framework, type, category, source, min_score

        Returns:
            RAGContext with ranked results and the elapsed time in milliseconds

        Raises:
            ValidationError: If the query or options are invalid
        """
        if not isinstance(query, str) or not query.strip():
            raise ValidationError("Query must be a non-empty string", details={"constraint": "query: non-empty"})
        if len(query) > MAX_QUERY_LENGTH:
            raise ValidationError(
                f"Query exceeds {MAX_QUERY_LENGTH} characters",
                details={"constraint": f"query: at most {MAX_QUERY_LENGTH} characters", "length": len(query)},
            )
        opts = merge_options(SearchOptions, options, kwargs)

        with timer(f"Search (top_k={opts.top_k}, filters={opts.filters()})", log_level="DEBUG") as timing:
            query_vector = await self.embedder.aembed(query)
            results = await asyncio.to_thread(self.vector_store.search, query_vector, opts)

        return RAGContext(
            query=query,
            results=results,
            total_results=len(results),
            search_time=timing.elapsed_ms,
        )

    async def get_stats(self) -> StoreStats:
        return await asyncio.to_thread(self.vector_store.get_stats)

    async def delete_by_source(self, source: str) -> int:
        return await asyncio.to_thread(self.vector_store.delete_by_source, source)

    async def clear(self) -> None:
        await asyncio.to_thread(self.vector_store.clear)

    def generate_context_prompt(self, rag_context: RAGContext, user_query: str, active_file: str | None = None) -> str:
        """Format search results for an LLM prompt. See ``prompt.generate_context_prompt``."""
        return generate_context_prompt(rag_context, user_query, active_file)

    def close(self) -> None:
        """Release store connections and embedder HTTP clients."""
        self.vector_store.close()
        close_embedder = getattr(self.embedder, "close", None)
        if callable(close_embedder):
            close_embedder()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def create_engine(settings: Settings | None = None, **overrides: Any) -> RAGEngine:
    """Build a RAGEngine from settings.

    Args:
        settings: Settings to use; defaults to the environment-loaded settings
        **overrides: Extra vector store parameters (e.g. ``db_path``)

    Returns:
        Engine wired to the configured embedder and store

    Raises:
        ConfigurationError: If a configured type is unknown or a required setting is missing
    """
    settings = settings or default_settings

    if settings.EMBEDDER_TYPE == "openai":
        embedder = EmbedderFactory.create(
            "openai",
            api_key=settings.OPENAI_API_KEY,
            model=settings.EMBEDDING_MODEL,
            base_url=settings.OPENAI_BASE_URL,
            dimension=settings.EMBEDDING_DIMENSION,
            timeout=settings.EMBEDDING_TIMEOUT,
        )
    else:
        embedder = EmbedderFactory.create(settings.EMBEDDER_TYPE, dimension=settings.EMBEDDING_DIMENSION)

    store_params = dict(overrides)
    if settings.VECTOR_STORE_TYPE == "sqlite":
        store_params.setdefault("db_path", settings.VECTOR_DB_PATH)

    vector_store = VectorStoreFactory.create(settings.VECTOR_STORE_TYPE, embedder.dimension, **store_params)
    return RAGEngine(vector_store, embedder)
