import os
from pathlib import Path
from unittest.mock import patch

import pytest

from fivem_rag.config.models import (
    IngestOptions,
    IngestRequest,
    SearchOptions,
    SearchRequest,
    merge_options,
    parse_model,
)
from fivem_rag.config.settings import Settings, dimension_for_model, load_settings
from fivem_rag.errors import ValidationError


class TestSettings:

    @patch.dict(os.environ, {
        "ENV": "production",
        "LOG_LEVEL": "DEBUG",
        "VECTOR_DB_PATH": "/tmp/fivem.db",
        "VECTOR_STORE_TYPE": "memory",
        "OPENAI_API_KEY": "sk-test-key",
        "EMBEDDING_MODEL": "text-embedding-3-large",
    }, clear=True)
    def test_load_settings_from_env(self):
        settings = load_settings()

        assert settings.ENV == "production"
        assert settings.LOG_LEVEL == "DEBUG"
        assert settings.VECTOR_DB_PATH == "/tmp/fivem.db"
        assert settings.VECTOR_STORE_TYPE == "memory"
        assert settings.OPENAI_API_KEY == "sk-test-key"
        assert settings.EMBEDDER_TYPE == "openai"
        assert settings.EMBEDDING_DIMENSION == 3072

    def test_default_values(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = load_settings()

            assert settings.ENV == "development"
            assert settings.LOG_LEVEL == "INFO"
            assert settings.VECTOR_STORE_TYPE == "sqlite"
            assert settings.VECTOR_DB_PATH.endswith(str(Path("data") / "vector.db"))
            assert settings.OPENAI_API_KEY is None
            assert settings.EMBEDDER_TYPE == "hashing"
            assert settings.EMBEDDING_DIMENSION == 1536

    @patch.dict(os.environ, {"EMBEDDING_DIMENSION": "256"}, clear=True)
    def test_dimension_override(self):
        assert load_settings().EMBEDDING_DIMENSION == 256

    def test_root_dir_resolution(self):
        settings = load_settings()
        assert isinstance(settings.ROOT_DIR, Path)
        # settings.py lives in src/fivem_rag/config/
        assert (settings.ROOT_DIR / "src" / "fivem_rag").exists()

    def test_settings_are_frozen(self):
        settings = Settings()
        with pytest.raises(Exception):
            settings.ENV = "production"

    def test_dimension_for_model(self):
        assert dimension_for_model("text-embedding-3-small") == 1536
        assert dimension_for_model("text-embedding-3-large") == 3072


class TestIngestOptions:

    def test_defaults(self):
        options = IngestOptions()
        assert (options.chunk_size, options.chunk_overlap, options.batch_size) == (1000, 200, 10)

    def test_camel_case_aliases(self):
        options = parse_model(IngestOptions, {"chunkSize": 800, "chunkOverlap": 100, "batchSize": 5})
        assert (options.chunk_size, options.chunk_overlap, options.batch_size) == (800, 100, 5)

    def test_overlap_must_be_smaller_than_size(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_model(IngestOptions, {"chunk_size": 100, "chunk_overlap": 100})
        assert "chunk_overlap" in exc_info.value.details["constraint"]

    @pytest.mark.parametrize("field, value", [("chunk_size", 0), ("chunk_overlap", -1), ("batch_size", 0)])
    def test_range_violations(self, field, value):
        with pytest.raises(ValidationError):
            parse_model(IngestOptions, {field: value})


class TestSearchOptions:

    def test_defaults(self):
        options = SearchOptions()
        assert options.top_k == 6
        assert options.min_score == 0.0
        assert options.filters() == {}

    @pytest.mark.parametrize("top_k", [0, 21, -3])
    def test_top_k_range(self, top_k):
        with pytest.raises(ValidationError) as exc_info:
            parse_model(SearchOptions, {"top_k": top_k})
        assert "top_k" in exc_info.value.details["constraint"]

    def test_filters_only_include_set_fields(self):
        options = SearchOptions(framework="qbcore", category="player")
        assert options.filters() == {"framework": "qbcore", "category": "player"}

    def test_blank_filters_are_unconstrained(self):
        options = SearchOptions(framework="", source="  ")
        assert options.filters() == {}

    def test_min_score_range(self):
        with pytest.raises(ValidationError):
            parse_model(SearchOptions, {"min_score": 1.5})


class TestMergeOptions:

    def test_keywords_only(self):
        assert merge_options(SearchOptions, None, {"top_k": 3}).top_k == 3

    def test_model_plus_override(self):
        merged = merge_options(SearchOptions, SearchOptions(top_k=3, framework="esx"), {"top_k": 5})
        assert merged.top_k == 5
        assert merged.framework == "esx"

    def test_mapping_with_aliases(self):
        merged = merge_options(SearchOptions, {"topK": 2, "minScore": 0.1}, {})
        assert merged.top_k == 2
        assert merged.min_score == 0.1

    def test_model_passthrough(self):
        options = SearchOptions(top_k=4)
        assert merge_options(SearchOptions, options, {}) is options


class TestRequests:

    def test_search_request_all_means_unfiltered(self):
        request = parse_model(SearchRequest, {"query": "GetPlayerPed", "topK": 3, "framework": "all"})
        assert request.to_options().filters() == {}
        assert request.to_options().top_k == 3

    def test_search_request_framework_filter(self):
        request = SearchRequest(query="xPlayer", framework="esx")
        assert request.to_options().filters() == {"framework": "esx"}

    @pytest.mark.parametrize("payload", [
        {"query": ""},
        {"query": "x" * 501},
        {"query": "ok", "framework": "vrp"},
        {"query": "ok", "topK": 25},
    ])
    def test_search_request_rejected(self, payload):
        with pytest.raises(ValidationError):
            parse_model(SearchRequest, payload)

    def test_ingest_request(self):
        request = parse_model(IngestRequest, {
            "documents": [{"content": "text", "metadata": {"source": "s", "framework": "fivem", "type": "native"}}],
            "chunkSize": 500,
            "chunkOverlap": 50,
        })
        options = request.to_options()
        assert (options.chunk_size, options.chunk_overlap, options.batch_size) == (500, 50, 5)
        assert request.documents[0].metadata.type == "native"

    @pytest.mark.parametrize("field, value", [("chunkSize", 99), ("chunkSize", 2001), ("chunkOverlap", 501)])
    def test_ingest_request_ranges(self, field, value):
        with pytest.raises(ValidationError):
            parse_model(IngestRequest, {"documents": [], field: value})
