"""Tests for Firestore REST value encoding and decoding."""

from datetime import UTC, datetime

import pytest

from fireview.infrastructure.firebase._rest_encoding import (
    decode_document,
    document_id_from_name,
    encode_document,
)


def test_encode_scalars_and_nesting() -> None:
    encoded = encode_document(
        {
            "s": "x",
            "i": 3,
            "f": 1.5,
            "b": True,
            "n": None,
            "t": datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC),
            "l": [1, "a"],
            "m": {"k": False},
        }
    )["fields"]
    assert encoded["s"] == {"stringValue": "x"}
    assert encoded["i"] == {"integerValue": "3"}
    assert encoded["f"] == {"doubleValue": 1.5}
    assert encoded["b"] == {"booleanValue": True}
    assert encoded["n"] == {"nullValue": None}
    assert encoded["t"] == {"timestampValue": "2024-01-02T03:04:05.000000Z"}
    assert encoded["l"] == {"arrayValue": {"values": [{"integerValue": "1"}, {"stringValue": "a"}]}}
    assert encoded["m"] == {"mapValue": {"fields": {"k": {"booleanValue": False}}}}


def test_encode_rejects_unknown_types() -> None:
    with pytest.raises(TypeError):
        encode_document({"x": object()})


def test_decode_store_values() -> None:
    fields = {
        "i": {"integerValue": "42"},
        "t": {"timestampValue": "2024-01-02T03:04:05.123456789Z"},
        "r": {"referenceValue": "projects/p/databases/(default)/documents/users/alice"},
        "g": {"geoPointValue": {"latitude": 0.3, "longitude": 32.5}},
        "e": {"arrayValue": {}},
        "m": {"mapValue": {"fields": {"x": {"nullValue": None}}}},
    }
    decoded = decode_document(fields)
    assert decoded["i"] == 42
    assert decoded["t"] == datetime(2024, 1, 2, 3, 4, 5, 123456, tzinfo=UTC)
    assert decoded["r"] == "users/alice"
    assert decoded["g"] == {"latitude": 0.3, "longitude": 32.5}
    assert decoded["e"] == []
    assert decoded["m"] == {"x": None}


def test_decode_empty_fields() -> None:
    assert decode_document(None) == {}


def test_document_id_from_name() -> None:
    assert document_id_from_name("projects/p/databases/(default)/documents/users/abc") == "abc"
    assert document_id_from_name("") == ""


def test_decode_special_doubles_and_unknown_tags() -> None:
    decoded = decode_document(
        {"inf": {"doubleValue": "Infinity"}, "odd": {"futureValue": 1}}
    )
    assert decoded["inf"] == float("inf")
    assert decoded["odd"] is None
