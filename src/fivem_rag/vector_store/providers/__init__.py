from .in_memory import InMemoryVectorStore
from .sqlite import SQLiteVectorStore

__all__ = ["InMemoryVectorStore", "SQLiteVectorStore"]
