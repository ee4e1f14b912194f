"""Unit tests for the snapshot codec (raw clone vs. compressed text)."""

from __future__ import annotations

import base64
import zlib
from unittest.mock import patch

from undoline.core.history import codec
from undoline.core.history.codec import decode, encode


def test_raw_encode_clones_and_decode_is_identity() -> None:
    """Raw snapshots are deep clones and decode to themselves."""
    value = {"shape": "rect", "points": [[0, 0], [1, 1]]}
    stored = encode(value, compressed=False)
    assert stored == value and stored is not value
    assert decode(stored, compressed=False) is stored


def test_compressed_round_trip_nested() -> None:
    """Compressed snapshots are ASCII text that decode to an equal structure."""
    value = {"name": "Jane", "tags": ["a", "b"], "meta": {"age": 26, "ok": None}}
    stored = encode(value, compressed=True)
    assert isinstance(stored, str)
    assert stored.isascii()
    assert decode(stored, compressed=True) == value


def test_compressed_string_value_round_trip() -> None:
    """A plain string is still encoded, so it can't be confused with a raw entry."""
    stored = encode("état 1", compressed=True)
    assert stored != "état 1"
    assert decode(stored, compressed=True) == "état 1"


def test_compression_level_is_respected() -> None:
    """Any zlib level produces a decodable snapshot."""
    value = ["x" * 200]
    fast = encode(value, compressed=True, level=0)
    small = encode(value, compressed=True, level=9)
    assert len(small) < len(fast)
    assert decode(fast, compressed=True) == decode(small, compressed=True) == value


def test_unserializable_value_falls_back_to_raw_clone() -> None:
    """Sets are not JSON; they are stored raw and decode unchanged."""
    value = {1, 2, 3}
    with patch.object(codec, "logger") as log:
        stored = encode(value, compressed=True)
    assert stored == value and stored is not value
    assert decode(stored, compressed=True) is stored
    log.warning.assert_called_once()


def test_malformed_text_returns_raw_text() -> None:
    """Garbage text is surfaced as-is instead of raising."""
    with patch.object(codec, "logger") as log:
        assert decode("not base64 !!", compressed=True) == "not base64 !!"
    log.warning.assert_called_once()


def test_valid_base64_but_not_zlib_returns_raw_text() -> None:
    """Each decode stage can fail independently."""
    text = base64.b64encode(b"hello").decode("ascii")
    with patch.object(codec, "logger"):
        assert decode(text, compressed=True) == text


def test_valid_zlib_but_not_json_returns_raw_text() -> None:
    """Inflated bytes that are not JSON also fall back to the raw text."""
    text = base64.b64encode(zlib.compress(b"{oops")).decode("ascii")
    with patch.object(codec, "logger"):
        assert decode(text, compressed=True) == text


def test_raw_mode_string_is_not_parsed() -> None:
    """Without compression, text is a live value like any other."""
    assert decode("aGVsbG8=", compressed=False) == "aGVsbG8="


def test_compressed_none_value() -> None:
    """``None`` survives the compressed round trip."""
    assert decode(encode(None, compressed=True), compressed=True) is None


def test_non_string_keys_are_stored_raw() -> None:
    """JSON would turn ``1`` into ``"1"``; the value is kept as a raw clone instead."""
    value = {1: "a", 2: "b"}
    with patch.object(codec, "logger") as log:
        stored = encode(value, compressed=True)
    assert stored == value and stored is not value
    assert decode(stored, compressed=True) == {1: "a", 2: "b"}
    log.warning.assert_called_once()


def test_nested_tuple_is_stored_raw() -> None:
    """Tuples would come back as lists through JSON."""
    value = {"pts": (0, 1), "tags": ["a"]}
    with patch.object(codec, "logger") as log:
        stored = encode(value, compressed=True)
    restored = decode(stored, compressed=True)
    assert restored == value
    assert isinstance(restored["pts"], tuple)
    log.warning.assert_called_once()


def test_exact_json_values_are_compressed_without_warning() -> None:
    """Plain JSON-shaped data takes the text path and logs nothing."""
    with patch.object(codec, "logger") as log:
        stored = encode({"a": [1, 2.5, None, True]}, compressed=True)
    assert isinstance(stored, str)
    log.warning.assert_not_called()
