"""Vector similarity calculation utilities."""

from typing import Sequence

import numpy as np


def cosine_similarity(vec1: Sequence[float], vec2: Sequence[float]) -> float:
    """Calculate cosine similarity between two vectors.

    Args:
        vec1: First vector
        vec2: Second vector

    Returns:
        Similarity score in [-1, 1]; 0.0 when either vector has zero norm

    Raises:
        ValueError: If vectors have different dimensions
    """
    a = np.asarray(vec1, dtype=np.float64)
    b = np.asarray(vec2, dtype=np.float64)

    if a.shape != b.shape:
        raise ValueError(
            f"Vector dimension mismatch: {a.size} != {b.size}"
        )

    norm_a = float(np.linalg.norm(a))
    norm_b = float(np.linalg.norm(b))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    score = float(np.dot(a, b)) / (norm_a * norm_b)

    # Clamp to [-1, 1] to handle floating point errors
    return max(-1.0, min(1.0, score))
