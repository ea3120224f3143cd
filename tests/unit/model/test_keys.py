"""Unit tests for model/keys.py — composite key encoding."""

import itertools

import pytest

from dirlist.model.keys import KEY_SEPARATOR, decode_key, encode_key


class TestEncodeKey:
    def test_plain_fields_joined_by_separator(self) -> None:
        assert encode_key("test_authority", "7") == f"test_authority{KEY_SEPARATOR}7"

    def test_is_deterministic(self) -> None:
        assert encode_key("auth0", "1") == encode_key("auth0", "1")

    def test_same_document_id_different_authority(self) -> None:
        assert encode_key("auth0", "1") != encode_key("auth1", "1")

    def test_separator_and_escape_characters_are_escaped(self) -> None:
        assert encode_key("a|b", "c\\d") == "a\\|b|c\\\\d"

    def test_no_collisions_over_awkward_alphabet(self) -> None:
        alphabet = ["", "a", "|", "\\", "a|", "|a", "\\|", "|\\", "\\\\", "a\\"]
        pairs = list(itertools.product(alphabet, repeat=2))
        keys = {encode_key(authority, doc_id) for authority, doc_id in pairs}
        assert len(keys) == len(pairs)


class TestDecodeKey:
    @pytest.mark.parametrize(
        ("authority", "document_id"),
        [
            ("test_authority", "0"),
            ("com.example.docs", "primary:Download/a|b.txt"),
            ("back\\slash", "trailing\\"),
            ("", ""),
        ],
    )
    def test_recovers_original_fields(self, authority: str, document_id: str) -> None:
        assert decode_key(encode_key(authority, document_id)) == (authority, document_id)

    def test_rejects_key_without_separator(self) -> None:
        with pytest.raises(ValueError, match="exactly one separator"):
            decode_key("no-separator")

    def test_rejects_key_with_two_separators(self) -> None:
        with pytest.raises(ValueError, match="exactly one separator"):
            decode_key("a|b|c")

    def test_rejects_dangling_escape(self) -> None:
        with pytest.raises(ValueError, match="Dangling escape"):
            decode_key("a|b\\")

    def test_rejects_unknown_escape(self) -> None:
        with pytest.raises(ValueError, match="Unknown escape"):
            decode_key("a\\x|b")
