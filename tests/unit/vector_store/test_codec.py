import pytest

from fivem_rag.vector_store.codec import decode_embedding, encode_embedding


def test_fixed_width_little_endian():
    blob = encode_embedding([1.0, -2.5, 0.0])
    assert len(blob) == 12
    assert blob[:4] == b"\x00\x00\x80\x3f"


def test_decode_restores_float32_values():
    values = [0.1, -0.25, 3.5]
    decoded = decode_embedding(encode_embedding(values))
    assert decoded == pytest.approx(values, rel=1e-6)
    assert all(isinstance(v, float) for v in decoded)


def test_empty_vector():
    assert encode_embedding([]) == b""
    assert decode_embedding(b"") == []


def test_misaligned_blob_rejected():
    with pytest.raises(ValueError, match="float32-aligned"):
        decode_embedding(b"\x00\x01\x02")
