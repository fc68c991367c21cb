"""Configuration system for fivem-rag."""

from .models import (
    IngestOptions,
    IngestRequest,
    SearchOptions,
    SearchRequest,
    merge_options,
    parse_model,
)
from .settings import Settings, load_settings

__all__ = [
    "IngestOptions",
    "IngestRequest",
    "SearchOptions",
    "SearchRequest",
    "merge_options",
    "parse_model",
    "Settings",
    "load_settings",
]
