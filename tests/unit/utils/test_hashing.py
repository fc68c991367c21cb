"""Tests for content IDs and the FNV-1a hash."""

import hashlib

from fivem_rag.utils.hashing import CONTENT_ID_LENGTH, content_id, fnv1a_32


class TestContentId:

    def test_is_truncated_sha256(self):
        text = "Wait(ms) pauses execution."
        assert content_id(text) == hashlib.sha256(text.encode("utf-8")).hexdigest()[:16]
        assert len(content_id(text)) == CONTENT_ID_LENGTH

    def test_stable_and_content_sensitive(self):
        assert content_id("GetPlayerPed") == content_id("GetPlayerPed")
        assert content_id("GetPlayerPed") != content_id("GetPlayerPed ")


class TestFnv1a:

    def test_reference_values(self):
        # Published FNV-1a 32-bit test vectors
        assert fnv1a_32("") == 0x811C9DC5
        assert fnv1a_32("a") == 0xE40C292C
        assert fnv1a_32("foobar") == 0xBF9CF968

    def test_fits_in_32_bits(self):
        assert 0 <= fnv1a_32("QBCore.Functions.GetPlayer" * 50) < 2**32
