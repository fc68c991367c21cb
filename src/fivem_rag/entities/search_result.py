"""SearchResult entity and the context returned by a search call."""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from .document import DocumentChunk


class SearchResult(DocumentChunk):
    """A stored chunk paired with its cosine similarity to the query.

    Attributes:
        score: Cosine similarity in [-1, 1]; only populated during a search
    """

    score: float = Field(..., ge=-1.0, le=1.0)


class RAGContext(BaseModel):
    """Ranked results of one search, with wall-clock latency.

    Attributes:
        query: The query text as submitted
        results: Results in descending score order
        total_results: Number of results returned
        search_time: Milliseconds spent embedding, scanning and ranking
    """

    query: str
    results: list[SearchResult] = Field(default_factory=list)
    total_results: int = 0
    search_time: float = 0.0

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }
