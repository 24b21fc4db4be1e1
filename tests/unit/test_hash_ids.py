"""
Unit Tests for Hashed Identifiers
=================================
"""

import pytest

from quality_range.core.hash_ids import HashIdDecodeError, decode_id_to_long, encode_id


class TestHashIds:
    @pytest.mark.parametrize("value", [1, 42, 123456789])
    def test_decode_encoded(self, value):
        assert decode_id_to_long(encode_id(value)) == value

    def test_encoded_respects_min_length(self, test_settings):
        assert len(encode_id(1)) >= test_settings.hash_id_min_length

    def test_salt_matters(self):
        hashed = encode_id(7, salt="other-salt")

        assert decode_id_to_long(hashed, salt="other-salt") == 7
        with pytest.raises(HashIdDecodeError):
            decode_id_to_long(hashed)

    @pytest.mark.parametrize("hash_id", ["", "!!!", "not-a-hash!"])
    def test_invalid_ids(self, hash_id):
        with pytest.raises(HashIdDecodeError) as exc_info:
            decode_id_to_long(hash_id)

        assert exc_info.value.hash_id == hash_id
        assert isinstance(exc_info.value, ValueError)
