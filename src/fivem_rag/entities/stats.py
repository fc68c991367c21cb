"""Summary entities returned by ingestion and statistics calls."""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class IngestResult(BaseModel):
    """Outcome of an ingestion call.

    Attributes:
        processed_documents: Documents whose batch was stored
        total_chunks: Chunks written to the store
        failed_documents: Documents whose batch failed
    """

    processed_documents: int = 0
    total_chunks: int = 0
    failed_documents: int = 0

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class StoreStats(BaseModel):
    """Aggregate counts over the stored chunks.

    Each map counts records grouped by one metadata field. Records without
    a category contribute to ``total_documents`` but not to ``categories``.
    """

    total_documents: int = 0
    frameworks: dict[str, int] = Field(default_factory=dict)
    types: dict[str, int] = Field(default_factory=dict)
    categories: dict[str, int] = Field(default_factory=dict)
    sources: dict[str, int] = Field(default_factory=dict)

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }
