"""Tests for document domain types."""

from datetime import datetime
from typing import get_args

from fireview.domain.entities import DocumentData, DocumentRecord, FieldValue, ImportItem


def test_document_data_maps_names_to_field_values() -> None:
    key_type, value_type = get_args(DocumentData)
    assert key_type is str
    assert value_type == FieldValue
    assert {str, int, float, bool, bytes, datetime, type(None)} <= set(get_args(FieldValue))


def test_flatten_puts_id_first() -> None:
    record = DocumentRecord("alice", {"name": "Alice", "tags": ["a"]})
    assert record.flatten() == {"id": "alice", "name": "Alice", "tags": ["a"]}
    assert list(record.flatten())[0] == "id"


def test_import_item_label_defaults_to_auto() -> None:
    assert ImportItem({"a": 1}).label == "auto"
    assert ImportItem({"a": 1}, "k").label == "k"
