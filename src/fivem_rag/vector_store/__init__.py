"""Vector store module."""

from .base import BaseVectorStore
from .codec import decode_embedding, encode_embedding
from .factory import VectorStoreFactory
from .providers import InMemoryVectorStore, SQLiteVectorStore

__all__ = [
    "BaseVectorStore",
    "InMemoryVectorStore",
    "SQLiteVectorStore",
    "VectorStoreFactory",
    "decode_embedding",
    "encode_embedding",
]
