"""Vector store factory for creating store instances."""

from typing import Any

from loguru import logger

from ..config.settings import settings
from ..errors import ConfigurationError
from .base import BaseVectorStore
from .providers.in_memory import InMemoryVectorStore
from .providers.sqlite import SQLiteVectorStore


class VectorStoreFactory:
    """
    Factory for creating vector store instances based on type.
    """

    _registry: dict[str, type[BaseVectorStore]] = {
        "sqlite": SQLiteVectorStore,
        "memory": InMemoryVectorStore,
    }

    @classmethod
    def create(cls, type_name: str, dimension: int, **params: Any) -> BaseVectorStore:
        """
        Create a vector store instance.

        Args:
            type_name: Type identifier ("sqlite" or "memory")
            dimension: Embedding length the store accepts
            **params: Additional backend parameters (e.g. db_path)

        Raises:
            ConfigurationError: If the type is not registered
        """
        if not type_name:
            type_name = "sqlite"

        if type_name not in cls._registry:
            available = ", ".join(cls._registry.keys())
            raise ConfigurationError(
                f"Unknown vector store type: '{type_name}'. Available types: {available}"
            )

        store_class = cls._registry[type_name]

        if type_name == "sqlite" and "db_path" not in params:
            params["db_path"] = settings.VECTOR_DB_PATH

        logger.debug(f"Creating {store_class.__name__} (dimension={dimension}) with params: {params}")
        return store_class(dimension=dimension, **params)

    @classmethod
    def register(cls, type_name: str, store_class: type[BaseVectorStore]) -> None:
        """Register a new vector store type."""
        if not issubclass(store_class, BaseVectorStore):
            raise TypeError(f"{store_class.__name__} must be a subclass of BaseVectorStore")
        cls._registry[type_name] = store_class
        logger.info(f"Registered vector store type '{type_name}': {store_class.__name__}")

    @classmethod
    def list_types(cls) -> list[str]:
        return list(cls._registry.keys())
