"""Document entities: ingestion input and the stored chunk record."""

from datetime import datetime

from pydantic import BaseModel, Field, computed_field
from pydantic.alias_generators import to_camel

from ..utils.hashing import content_id


class DocumentMetadata(BaseModel):
    """Classification tags and position hints carried by a document.

    ``source``, ``framework`` and ``type`` are the filter axes and must be
    non-empty; they are treated as opaque tags. The optional fields are
    free-form.
    """

    source: str = Field(..., min_length=1)
    framework: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    title: str | None = None
    category: str | None = None
    file_path: str | None = None
    line_number: int | None = None

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore",
    }


class DocumentInput(BaseModel):
    """A raw document submitted for ingestion."""

    content: str = Field(..., min_length=1)
    metadata: DocumentMetadata


class DocumentChunk(BaseModel):
    """
    The atomic retrievable unit: a chunk of text with its embedding.

    The ``id`` is always derived from the content, so writing the same text
    twice replaces the earlier record instead of duplicating it. An ``id``
    passed to the constructor is ignored.
    """

    content: str = Field(..., min_length=1)
    embedding: list[float]
    metadata: DocumentMetadata
    created_at: datetime | None = None

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    @computed_field
    @property
    def id(self) -> str:
        return content_id(self.content)
