"""Built-in knowledge base and seeding helpers."""

from .seed import (
    FIVEM_KNOWLEDGE_BASE,
    SEED_OPTIONS,
    USER_DOCUMENT_OPTIONS,
    add_user_documents,
    initialize_knowledge_base,
)

__all__ = [
    "FIVEM_KNOWLEDGE_BASE",
    "SEED_OPTIONS",
    "USER_DOCUMENT_OPTIONS",
    "add_user_documents",
    "initialize_knowledge_base",
]
