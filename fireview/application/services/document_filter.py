"""Pure filtering of cached documents for the document view.

The filtered view is recomputed from the cache on every request and never
stored. Field filter runs first, then free-text search; both must match.
"""

from __future__ import annotations

from collections.abc import Sequence

from fireview.domain.entities import DocumentRecord
from fireview.shared.utils import stringify_value


def _matches_field(record: DocumentRecord, field_name: str, needle: str) -> bool:
    value = record.data.get(field_name)
    if value is None:
        return False
    return needle in stringify_value(value).lower()


def _matches_search(record: DocumentRecord, needle: str) -> bool:
    if needle in record.id.lower():
        return True
    return any(
        needle in stringify_value(value).lower()
        for value in record.data.values()
        if value is not None
    )


def filter_documents(
    documents: Sequence[DocumentRecord],
    search_term: str | None = None,
    field_name: str | None = None,
    field_value: str | None = None,
) -> list[DocumentRecord]:
    """Return the documents matching the field filter and the search term.

    Inputs are trimmed. The field filter applies only when both field_name
    and field_value are non-empty; matching is case-insensitive substring
    on the stringified value. Order of the input is preserved.
    """
    result = list(documents)

    field_name = (field_name or "").strip()
    field_value = (field_value or "").strip()
    if field_name and field_value:
        needle = field_value.lower()
        result = [doc for doc in result if _matches_field(doc, field_name, needle)]

    term = (search_term or "").strip().lower()
    if term:
        result = [doc for doc in result if _matches_search(doc, term)]

    return result
