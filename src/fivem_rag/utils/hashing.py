"""Hashing helpers for content-derived IDs and fallback vectors."""

import hashlib

CONTENT_ID_LENGTH = 16

_FNV_OFFSET = 0x811C9DC5
_FNV_PRIME = 0x01000193


def content_id(content: str) -> str:
    """Return the stable chunk ID for a piece of text.

    Args:
        content: Chunk text

    Returns:
        First 16 hex characters of the SHA-256 digest of ``content``
    """
    return hashlib.sha256(content.encode("utf-8")).hexdigest()[:CONTENT_ID_LENGTH]


def fnv1a_32(text: str) -> int:
    """32-bit FNV-1a hash of the UTF-8 bytes of ``text``.

    Unlike the builtin ``hash``, the value is stable across processes.
    """
    value = _FNV_OFFSET
    for byte in text.encode("utf-8"):
        value ^= byte
        value = (value * _FNV_PRIME) & 0xFFFFFFFF
    return value
