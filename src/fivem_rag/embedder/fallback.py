"""Deterministic pseudo-embeddings used when a provider call fails.

The vectors carry no semantic meaning. They only guarantee the right
dimension, unit length, and that the same text always maps to the same
vector, so content-hash deduplication keeps working during an outage.
"""

import numpy as np

from ..utils.hashing import fnv1a_32

_KNUTH_MULTIPLIER = np.uint64(2654435761)
_MOD_32 = np.uint64(2**32)


def fallback_embedding(text: str, dimension: int) -> list[float]:
    """Derive a unit-length vector from ``text``.

    Each component is seeded by ``(hash(text) + i) * 2654435761 mod 2**32``
    and mapped through ``sin`` into [-0.5, 0.5].

    Args:
        text: Input text
        dimension: Vector size

    Returns:
        Unit-normalised vector of length ``dimension``
    """
    base = np.uint64(fnv1a_32(text))
    # uint64 wrap-around does not change the result modulo 2**32
    with np.errstate(over="ignore"):
        seeds = ((base + np.arange(dimension, dtype=np.uint64)) * _KNUTH_MULTIPLIER) % _MOD_32
    values = (np.sin(seeds.astype(np.float64)) + 1.0) / 2.0 - 0.5

    norm = float(np.linalg.norm(values))
    if norm == 0.0:
        values = np.zeros(dimension, dtype=np.float64)
        values[0] = 1.0
        return values.tolist()

    return (values / norm).tolist()
