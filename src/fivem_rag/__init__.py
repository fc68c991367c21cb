"""
fivem-rag - Retrieval core for a FiveM Lua development assistant.

Ingests documentation into overlapping word-window chunks, embeds them,
stores them in a local vector store and ranks them against queries by
cosine similarity.
"""

__version__ = "0.1.0"

from .chunker import BaseChunker, WordWindowChunker
from .config import IngestOptions, SearchOptions, Settings, load_settings
from .config.settings import settings
from .embedder import BaseEmbedder, EmbedderFactory, HashingEmbedder, OpenAIEmbedder
from .engine import RAGEngine, create_engine
from .entities import (
    DocumentChunk,
    DocumentInput,
    DocumentMetadata,
    IngestResult,
    RAGContext,
    SearchResult,
    StoreStats,
)
from .errors import FivemRAGError, ValidationError, VectorStoreError
from .indexing import IndexingPipeline
from .prompt import generate_context_prompt
from .vector_store import BaseVectorStore, InMemoryVectorStore, SQLiteVectorStore, VectorStoreFactory

__all__ = [
    "__version__",
    # Engine
    "RAGEngine",
    "create_engine",
    "IndexingPipeline",
    "generate_context_prompt",
    # Components
    "BaseChunker",
    "WordWindowChunker",
    "BaseEmbedder",
    "EmbedderFactory",
    "HashingEmbedder",
    "OpenAIEmbedder",
    "BaseVectorStore",
    "InMemoryVectorStore",
    "SQLiteVectorStore",
    "VectorStoreFactory",
    # Entities
    "DocumentChunk",
    "DocumentInput",
    "DocumentMetadata",
    "IngestResult",
    "RAGContext",
    "SearchResult",
    "StoreStats",
    # Configuration
    "IngestOptions",
    "SearchOptions",
    "Settings",
    "load_settings",
    "settings",
    # Errors
    "FivemRAGError",
    "ValidationError",
    "VectorStoreError",
]
