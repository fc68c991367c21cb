"""Tests for the local feature-hashing embedder."""

import numpy as np
import pytest

from fivem_rag.embedder.fallback import fallback_embedding
from fivem_rag.embedder.providers.hashing import HashingEmbedder
from fivem_rag.utils.similarity import cosine_similarity


class TestHashingEmbedder:

    @pytest.fixture
    def embedder(self):
        return HashingEmbedder(dimension=128)

    def test_dimension_and_norm(self, embedder):
        vector = embedder.embed("local ped = GetPlayerPed(-1)")
        assert len(vector) == 128
        assert float(np.linalg.norm(vector)) == pytest.approx(1.0)

    def test_components_non_negative(self, embedder):
        assert min(embedder.embed("RegisterNetEvent handler")) >= 0.0

    def test_shared_tokens_score_positive(self, embedder):
        doc = embedder.embed("Wait(ms) pauses execution. Always call Wait inside loops.")
        query = embedder.embed("how do I wait in a loop")
        assert cosine_similarity(doc, query) > 0.0

    def test_case_insensitive(self, embedder):
        assert embedder.embed("QBCore Player") == embedder.embed("qbcore player")

    def test_no_tokens_uses_fallback(self, embedder):
        assert embedder.embed("!!! ---") == fallback_embedding("!!! ---", 128)

    def test_invalid_dimension(self):
        with pytest.raises(ValueError):
            HashingEmbedder(dimension=0)
