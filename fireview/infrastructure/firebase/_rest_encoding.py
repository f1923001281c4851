"""Firestore REST `Value` codec.

A REST document carries its fields as typed wrappers such as
{"integerValue": "42"} or {"mapValue": {"fields": {...}}}. Decoding yields
the plain Python values the console shows; encoding goes the other way for
writes. Integers travel as strings, doubles may arrive as "NaN"/"Infinity",
and timestamps carry up to nanoseconds.
"""

import base64
from collections.abc import Callable
from datetime import datetime
from typing import Any

from fireview.domain.entities import DocumentData
from fireview.shared.utils.datetime import parse_rfc3339, to_rfc3339


def encode_value(value: Any) -> dict[str, Any]:
    """Wrap one Python value in its Firestore REST type tag."""
    if value is None:
        return {"nullValue": None}
    # bool before int: True is an int.
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, datetime):
        return {"timestampValue": to_rfc3339(value)}
    if isinstance(value, (bytes, bytearray)):
        return {"bytesValue": base64.standard_b64encode(bytes(value)).decode("ascii")}
    if isinstance(value, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(item) for item in value]}}
    if isinstance(value, dict):
        return {"mapValue": encode_document(value)}
    raise TypeError(f"Cannot store {type(value).__name__} in Firestore")


def encode_document(data: DocumentData) -> dict[str, Any]:
    """Build the REST Document body ({"fields": ...}) for data."""
    return {"fields": {str(key): encode_value(value) for key, value in data.items()}}


def _reference_path(name: str) -> str:
    # projects/{p}/databases/{d}/documents/{path}
    _, sep, path = name.partition("/documents/")
    return path if sep else name


def _geo_point(point: dict | None) -> dict[str, float]:
    point = point or {}
    return {
        "latitude": float(point.get("latitude", 0.0)),
        "longitude": float(point.get("longitude", 0.0)),
    }


_DECODERS: dict[str, Callable[[Any], Any]] = {
    "nullValue": lambda _: None,
    "booleanValue": bool,
    "integerValue": int,
    "doubleValue": float,
    "stringValue": str,
    "timestampValue": parse_rfc3339,
    "bytesValue": base64.standard_b64decode,
    "referenceValue": _reference_path,
    "geoPointValue": _geo_point,
    "arrayValue": lambda array: [decode_value(item) for item in (array or {}).get("values") or []],
    "mapValue": lambda mapping: decode_document((mapping or {}).get("fields")),
}


def decode_value(wrapper: dict[str, Any]) -> Any:
    """Unwrap one Firestore REST value; unknown type tags decode to None."""
    for tag, payload in wrapper.items():
        decoder = _DECODERS.get(tag)
        if decoder is not None:
            return decoder(payload)
    return None


def decode_document(fields: dict[str, Any] | None) -> DocumentData:
    """Turn a REST Document's `fields` into a plain dict."""
    return {key: decode_value(value) for key, value in (fields or {}).items()}


def document_id_from_name(name: str) -> str:
    """Last path segment of a REST document name (the document ID)."""
    return name.rsplit("/", 1)[-1] if name else ""
