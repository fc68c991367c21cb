"""Behaviour shared by every vector store backend (run against SQLite and in-memory)."""

import pytest

from fivem_rag.config.models import SearchOptions
from fivem_rag.entities.document import DocumentChunk, DocumentMetadata
from fivem_rag.errors import ValidationError
from fivem_rag.utils.hashing import content_id
from tests.utils.assertions import assert_scores_descending, assert_search_results_valid
from tests.utils.builders import ChunkBuilder, unit_vector


@pytest.fixture
def chunk(dimension):
    def _make(content, axis=0, weight=1.0, **metadata):
        return ChunkBuilder(dimension).with_content(content).with_axis(axis, weight).with_metadata(**metadata).build()
    return _make


class TestWrites:

    def test_add_document_returns_content_id(self, vector_store, chunk):
        chunk_id = vector_store.add_document(chunk("Wait(ms) pauses execution"))
        assert chunk_id == content_id("Wait(ms) pauses execution")
        assert vector_store.count() == 1

    def test_caller_supplied_id_is_ignored(self, vector_store, chunk, dimension):
        vector_store.add_document(chunk("TriggerClientEvent sends to one client"))
        forged = DocumentChunk(
            id="custom",
            content="TriggerClientEvent sends to one client",
            embedding=unit_vector(dimension),
            metadata=DocumentMetadata(source="docs", framework="fivem", type="function"),
        )

        assert vector_store.add_document(forged) == content_id("TriggerClientEvent sends to one client")
        assert vector_store.count() == 1

    def test_same_content_overwrites(self, vector_store, chunk):
        vector_store.add_document(chunk("GetPlayerPed", category="player"))
        vector_store.add_document(chunk("GetPlayerPed", category="natives"))

        assert vector_store.count() == 1
        assert vector_store.get_stats().categories == {"natives": 1}

    def test_add_documents_returns_ids_in_order(self, vector_store, chunk):
        chunks = [chunk("a"), chunk("b"), chunk("c")]
        assert vector_store.add_documents(chunks) == [c.id for c in chunks]
        assert vector_store.count() == 3

    def test_empty_batch(self, vector_store):
        assert vector_store.add_documents([]) == []

    def test_wrong_dimension_rejects_whole_batch(self, vector_store, chunk, dimension):
        bad = ChunkBuilder(dimension).with_content("bad").with_embedding([1.0, 0.0]).build()

        with pytest.raises(ValidationError) as exc_info:
            vector_store.add_documents([chunk("good one"), bad, chunk("good two")])

        assert "dimension" in exc_info.value.details["constraint"]
        assert vector_store.count() == 0

    def test_empty_tag_rejects_whole_batch(self, vector_store, chunk):
        bad = chunk("bad tags")
        # model_construct bypasses pydantic validation of the tag
        bad.metadata = bad.metadata.model_construct(source="", framework="fivem", type="native")

        with pytest.raises(ValidationError):
            vector_store.add_documents([chunk("fine"), bad])
        assert vector_store.count() == 0


class TestSearch:

    def test_ranked_by_similarity(self, vector_store, chunk, dimension):
        vector_store.add_documents([
            chunk("far", axis=1),
            chunk("close", axis=0),
            chunk("middle", axis=0, weight=0.0),
        ])
        query = [0.9, 0.1] + [0.0] * (dimension - 2)

        results = vector_store.search(query, top_k=3)

        assert [r.content for r in results][:2] == ["close", "far"]
        assert_scores_descending(results)

    def test_top_k_truncates(self, vector_store, chunk, dimension):
        vector_store.add_documents([chunk(f"doc {i}", axis=0) for i in range(10)])
        results = vector_store.search(unit_vector(dimension), top_k=4)
        assert len(results) == 4
        assert_search_results_valid(results, top_k=4)

    def test_default_top_k_is_six(self, vector_store, chunk, dimension):
        vector_store.add_documents([chunk(f"doc {i}") for i in range(10)])
        assert len(vector_store.search(unit_vector(dimension))) == 6

    def test_min_score_filters(self, vector_store, chunk, dimension):
        vector_store.add_documents([chunk("aligned", axis=0), chunk("orthogonal", axis=1)])

        results = vector_store.search(unit_vector(dimension), min_score=0.5)

        assert [r.content for r in results] == ["aligned"]
        assert all(r.score >= 0.5 for r in results)

    def test_negative_scores_excluded_by_default(self, vector_store, chunk, dimension):
        vector_store.add_documents([chunk("opposite", axis=0, weight=-1.0)])

        assert vector_store.search(unit_vector(dimension)) == []
        results = vector_store.search(unit_vector(dimension), min_score=-1.0)
        assert results[0].score == pytest.approx(-1.0)

    def test_zero_vector_scores_zero(self, vector_store, chunk, dimension):
        vector_store.add_document(chunk("zero", axis=0, weight=0.0))
        results = vector_store.search(unit_vector(dimension))
        assert [r.score for r in results] == [0.0]

    def test_ties_keep_insertion_order(self, vector_store, chunk, dimension):
        names = ["first", "second", "third", "fourth"]
        vector_store.add_documents([chunk(name, axis=2) for name in names])

        results = vector_store.search(unit_vector(dimension, 2), top_k=4)

        assert [r.content for r in results] == names
        assert vector_store.search(unit_vector(dimension, 2), top_k=4) == results

    def test_framework_filter(self, vector_store, chunk, dimension):
        vector_store.add_documents([
            chunk("qb one", framework="qbcore"),
            chunk("esx one", framework="esx"),
            chunk("qb two", framework="qbcore"),
        ])

        results = vector_store.search(unit_vector(dimension), framework="qbcore")

        assert {r.content for r in results} == {"qb one", "qb two"}
        assert all(r.metadata.framework == "qbcore" for r in results)

    def test_filters_are_and_combined(self, vector_store, chunk, dimension):
        vector_store.add_documents([
            chunk("qb player", framework="qbcore", category="player"),
            chunk("qb commands", framework="qbcore", category="commands"),
            chunk("esx player", framework="esx", category="player"),
        ])

        options = SearchOptions(framework="qbcore", category="player")
        results = vector_store.search(unit_vector(dimension), options)

        assert [r.content for r in results] == ["qb player"]

    @pytest.mark.parametrize("field, value", [("type", "native"), ("source", "natives-docs")])
    def test_type_and_source_filters(self, vector_store, chunk, dimension, field, value):
        vector_store.add_documents([chunk("match", **{field: value}), chunk("other")])
        results = vector_store.search(unit_vector(dimension), **{field: value})
        assert [r.content for r in results] == ["match"]

    def test_result_carries_metadata_and_embedding(self, vector_store, chunk, dimension):
        vector_store.add_document(chunk(
            "RegisterNetEvent", framework="fivem", type="function", title="RegisterNetEvent",
            category="events", file_path="client.lua", line_number=42,
        ))

        [result] = vector_store.search(unit_vector(dimension))

        assert result.metadata.title == "RegisterNetEvent"
        assert result.metadata.category == "events"
        assert result.metadata.file_path == "client.lua"
        assert result.metadata.line_number == 42
        assert result.embedding == pytest.approx(unit_vector(dimension))
        assert result.id == content_id("RegisterNetEvent")

    def test_empty_store(self, vector_store, dimension):
        assert vector_store.search(unit_vector(dimension)) == []

    def test_query_dimension_checked(self, vector_store):
        with pytest.raises(ValidationError):
            vector_store.search([1.0, 0.0])

    def test_invalid_top_k(self, vector_store, dimension):
        with pytest.raises(ValidationError):
            vector_store.search(unit_vector(dimension), top_k=0)


class TestStatsAndDeletion:

    def test_stats_group_counts(self, vector_store, chunk):
        vector_store.add_documents([
            chunk("a", framework="qbcore", type="function", category="player", source="qb"),
            chunk("b", framework="qbcore", type="export", source="qb-target"),
            chunk("c", framework="esx", type="function", category="player", source="esx"),
        ])

        stats = vector_store.get_stats()

        assert stats.total_documents == 3
        assert stats.frameworks == {"qbcore": 2, "esx": 1}
        assert stats.types == {"function": 2, "export": 1}
        assert stats.sources == {"qb": 1, "qb-target": 1, "esx": 1}
        # chunk "b" has no category: counted in the total only
        assert stats.categories == {"player": 2}

    def test_delete_by_source(self, vector_store, chunk, dimension):
        vector_store.add_documents([chunk("x1", source="x"), chunk("x2", source="x"), chunk("y1", source="y")])

        assert vector_store.delete_by_source("x") == 2
        assert vector_store.search(unit_vector(dimension), source="x") == []
        assert vector_store.count() == 1

    def test_delete_unknown_source(self, vector_store, chunk):
        vector_store.add_document(chunk("y1", source="y"))
        assert vector_store.delete_by_source("nope") == 0
        assert vector_store.count() == 1

    def test_clear(self, vector_store, chunk):
        vector_store.add_documents([chunk("a"), chunk("b")])
        vector_store.clear()
        assert vector_store.get_stats().total_documents == 0
        assert vector_store.get_stats().frameworks == {}
