"""Option and request models for the retrieval core.

This module defines Pydantic models for the parameters accepted by
ingestion and search. Field names are snake_case; the camelCase names
used by the surrounding application (``chunkSize``, ``topK`` ...) are
accepted as aliases.
"""

from typing import Any, Literal, TypeVar

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ..entities.document import DocumentInput
from ..errors import ValidationError

DEFAULT_TOP_K = 6
MAX_TOP_K = 20
MAX_QUERY_LENGTH = 500

FrameworkFilter = Literal["qbcore", "esx", "fivem", "all"]

_OPTIONS_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "frozen": True,
}

M = TypeVar("M", bound=BaseModel)


def parse_model(model: type[M], data: Any) -> M:
    """Validate ``data`` into ``model``, raising the package ValidationError.

    Args:
        model: Pydantic model class to build
        data: Mapping (or model instance) to validate

    Returns:
        Validated model instance

    Raises:
        ValidationError: With the first violated constraint in ``details``
    """
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        errors = e.errors(include_url=False, include_context=False)
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        constraint = f"{location}: {first.get('msg', 'invalid value')}".strip(": ")
        raise ValidationError(
            f"Invalid {model.__name__}: {constraint}",
            details={"constraint": constraint, "errors": errors},
            original_error=e,
        ) from e


class IngestOptions(BaseModel):
    """Chunking and batching parameters for one ingestion call.

    Attributes:
        chunk_size: Words per chunk window
        chunk_overlap: Words shared by consecutive windows (must be < chunk_size)
        batch_size: Documents written per store transaction
    """

    chunk_size: int = Field(default=1000, ge=1)
    chunk_overlap: int = Field(default=200, ge=0)
    batch_size: int = Field(default=10, ge=1)

    model_config = _OPTIONS_CONFIG

    @model_validator(mode="after")
    def _check_window(self) -> "IngestOptions":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        return self


class SearchOptions(BaseModel):
    """Ranking and filtering parameters for a similarity search.

    Omitted filters are unconstrained; provided ones are AND-combined
    equality filters on the chunk metadata.
    """

    top_k: int = Field(default=DEFAULT_TOP_K, ge=1, le=MAX_TOP_K)
    framework: str | None = None
    type: str | None = None
    category: str | None = None
    source: str | None = None
    min_score: float = Field(default=0.0, ge=-1.0, le=1.0)

    model_config = _OPTIONS_CONFIG

    @field_validator("framework", "type", "category", "source")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    def filters(self) -> dict[str, str]:
        """Return the metadata equality filters that are set."""
        candidates = {
            "framework": self.framework,
            "type": self.type,
            "category": self.category,
            "source": self.source,
        }
        return {key: value for key, value in candidates.items() if value is not None}


class SearchRequest(BaseModel):
    """Search input as accepted at the application boundary."""

    query: str = Field(..., min_length=1, max_length=MAX_QUERY_LENGTH)
    top_k: int = Field(default=DEFAULT_TOP_K, ge=1, le=MAX_TOP_K)
    framework: FrameworkFilter = "all"

    model_config = _OPTIONS_CONFIG

    def to_options(self) -> SearchOptions:
        """Build store search options; ``"all"`` means no framework filter."""
        framework = None if self.framework == "all" else self.framework
        return SearchOptions(top_k=self.top_k, framework=framework)


class IngestRequest(BaseModel):
    """Ingest input as accepted at the application boundary."""

    documents: list[DocumentInput]
    chunk_size: int = Field(default=1000, ge=100, le=2000)
    chunk_overlap: int = Field(default=200, ge=0, le=500)
    batch_size: int = Field(default=5, ge=1)

    model_config = _OPTIONS_CONFIG

    def to_options(self) -> IngestOptions:
        return parse_model(
            IngestOptions,
            {
                "chunk_size": self.chunk_size,
                "chunk_overlap": self.chunk_overlap,
                "batch_size": self.batch_size,
            },
        )


def merge_options(model: type[M], options: M | dict[str, Any] | None, overrides: dict[str, Any]) -> M:
    """Build ``model`` from an optional base plus keyword overrides.

    Accepts the call styles used throughout the engine:
    ``search(q)``, ``search(q, SearchOptions(top_k=3))``,
    ``search(q, {"topK": 3})`` and ``search(q, top_k=3, framework="esx")``.
    """
    if options is None:
        return parse_model(model, overrides)
    if not overrides:
        return parse_model(model, options)
    base = options.model_dump() if isinstance(options, BaseModel) else dict(options)
    return parse_model(model, {**base, **overrides})
