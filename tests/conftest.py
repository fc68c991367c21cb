"""Pytest configuration and global fixtures for fivem-rag tests."""

import tempfile
from pathlib import Path

import pytest

from fivem_rag.embedder.providers.hashing import HashingEmbedder
from fivem_rag.engine import RAGEngine
from fivem_rag.entities.document import DocumentInput, DocumentMetadata
from fivem_rag.vector_store.providers.in_memory import InMemoryVectorStore
from fivem_rag.vector_store.providers.sqlite import SQLiteVectorStore

TEST_DIMENSION = 64


@pytest.fixture
def temp_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def db_path(temp_dir):
    return temp_dir / "vector.db"


@pytest.fixture
def dimension() -> int:
    return TEST_DIMENSION


@pytest.fixture
def hashing_embedder(dimension):
    return HashingEmbedder(dimension=dimension)


@pytest.fixture
def sqlite_store(db_path, dimension):
    store = SQLiteVectorStore(db_path=db_path, dimension=dimension)
    yield store
    store.close()


@pytest.fixture
def memory_store(dimension):
    return InMemoryVectorStore(dimension=dimension)


@pytest.fixture(params=["sqlite", "memory"])
def vector_store(request, db_path, dimension):
    """Run the test against both store backends."""
    if request.param == "sqlite":
        store = SQLiteVectorStore(db_path=db_path, dimension=dimension)
    else:
        store = InMemoryVectorStore(dimension=dimension)
    yield store
    store.close()


@pytest.fixture
def engine(vector_store, hashing_embedder):
    return RAGEngine(vector_store, hashing_embedder)


@pytest.fixture
def wait_document() -> DocumentInput:
    return DocumentInput(
        content="Wait(ms) pauses execution. Always call Wait inside loops.",
        metadata=DocumentMetadata(source="docs", framework="fivem", type="function", title="Wait"),
    )


@pytest.fixture
def sample_documents() -> list[DocumentInput]:
    return [
        DocumentInput(
            content="QBCore.Functions.GetPlayer(source) returns the QBCore player object for a server id.",
            metadata=DocumentMetadata(
                source="qbcore-docs", framework="qbcore", type="function",
                title="QBCore.Functions.GetPlayer", category="player",
            ),
        ),
        DocumentInput(
            content="ESX.GetPlayerFromId(playerId) returns the ESX xPlayer object for a server id.",
            metadata=DocumentMetadata(
                source="esx-docs", framework="esx", type="function",
                title="ESX.GetPlayerFromId", category="player",
            ),
        ),
        DocumentInput(
            content="RegisterNetEvent(eventName, handler) registers a network event handler on the client.",
            metadata=DocumentMetadata(
                source="fivem-docs", framework="fivem", type="function", title="RegisterNetEvent",
            ),
        ),
    ]


# ==================== Pytest Configuration ====================

def pytest_configure(config):
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests")


def pytest_collection_modifyitems(config, items):
    for item in items:
        rel_path = Path(item.fspath).relative_to(Path(__file__).parent)
        if "unit" in rel_path.parts:
            item.add_marker(pytest.mark.unit)
        elif "integration" in rel_path.parts:
            item.add_marker(pytest.mark.integration)
        elif "e2e" in rel_path.parts:
            item.add_marker(pytest.mark.e2e)
