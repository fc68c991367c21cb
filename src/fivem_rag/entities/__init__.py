from .document import DocumentChunk, DocumentInput, DocumentMetadata
from .search_result import RAGContext, SearchResult
from .stats import IngestResult, StoreStats

__all__ = [
    "DocumentChunk",
    "DocumentInput",
    "DocumentMetadata",
    "RAGContext",
    "SearchResult",
    "IngestResult",
    "StoreStats",
]
