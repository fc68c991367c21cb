"""Fixed-width binary codec for embeddings (little-endian float32)."""

from typing import Sequence

import numpy as np

_DTYPE = np.dtype("<f4")

BYTES_PER_COMPONENT = _DTYPE.itemsize


def encode_embedding(vector: Sequence[float]) -> bytes:
    """Serialize a vector to ``4 * len(vector)`` bytes."""
    return np.asarray(vector, dtype=_DTYPE).tobytes()


def decode_embedding(blob: bytes) -> list[float]:
    """Deserialize a blob produced by ``encode_embedding``.

    Raises:
        ValueError: If the blob length is not a multiple of 4 bytes
    """
    if len(blob) % BYTES_PER_COMPONENT:
        raise ValueError(f"Embedding blob of {len(blob)} bytes is not float32-aligned")
    return np.frombuffer(blob, dtype=_DTYPE).astype(np.float64).tolist()
