"""Tests for similarity calculation utilities."""

import math

import pytest

from fivem_rag.utils.similarity import cosine_similarity


class TestCosineSimilarity:
    """Tests for cosine_similarity function."""

    def test_identical_vectors(self):
        """A vector is maximally similar to itself."""
        vec = [0.3, -1.2, 4.0]
        assert cosine_similarity(vec, vec) == pytest.approx(1.0)

    def test_opposite_vectors(self):
        vec1 = [1.0, 0.0, 0.0]
        vec2 = [-1.0, 0.0, 0.0]
        assert cosine_similarity(vec1, vec2) == pytest.approx(-1.0)

    def test_orthogonal_vectors(self):
        vec1 = [1.0, 0.0, 0.0]
        vec2 = [0.0, 1.0, 0.0]
        assert cosine_similarity(vec1, vec2) == pytest.approx(0.0)

    def test_magnitude_is_ignored(self):
        assert cosine_similarity([1.0, 2.0], [10.0, 20.0]) == pytest.approx(1.0)

    def test_zero_vector_scores_zero(self):
        assert cosine_similarity([0.0, 0.0, 0.0], [1.0, 2.0, 3.0]) == 0.0
        assert cosine_similarity([1.0, 2.0, 3.0], [0.0, 0.0, 0.0]) == 0.0

    def test_dimension_mismatch(self):
        with pytest.raises(ValueError, match="dimension mismatch"):
            cosine_similarity([1.0, 0.0], [1.0, 0.0, 0.0])

    def test_output_range(self):
        """Output is always in [-1, 1]."""
        test_cases = [
            ([1.0, 0.0], [1.0, 0.0]),
            ([1.0, 0.0], [-1.0, 0.0]),
            ([0.5, 0.5], [0.5, -0.5]),
            ([1e-10, 1e-10], [1e-10, 1e-10]),
            ([3.0, -7.0, 2.5], [-1.0, 0.25, 9.0]),
        ]
        for vec1, vec2 in test_cases:
            result = cosine_similarity(vec1, vec2)
            assert -1.0 <= result <= 1.0, f"Result {result} out of range for {vec1}, {vec2}"

    def test_known_angle(self):
        result = cosine_similarity([1.0, 0.0], [1.0, 1.0])
        assert result == pytest.approx(1 / math.sqrt(2))
