"""Document domain types.

A document is an identified mapping of field names to field values. Field
values form a recursive union so filtering and serialization can handle
every shape the store returns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Union

from fireview.core.constants import AUTO_ID_LABEL

FieldValue = Union[
    str,
    int,
    float,
    bool,
    None,
    bytes,
    datetime,
    list["FieldValue"],
    dict[str, "FieldValue"],
]

DocumentData = dict[str, FieldValue]


@dataclass(frozen=True)
class DocumentRecord:
    """One document of a collection, as last fetched from the store.

    Identity is (collection path, id). Records are replaced wholesale on
    every fetch; they are never merged or mutated in place.
    """

    id: str
    data: DocumentData = field(default_factory=dict)

    def flatten(self) -> DocumentData:
        """Return {"id": ..., **data}, the shape used for export and summaries."""
        return {"id": self.id, **self.data}


@dataclass(frozen=True)
class ImportItem:
    """A single parsed bulk-import element: optional explicit ID plus data."""

    data: DocumentData
    id: str | None = None

    @property
    def label(self) -> str:
        """ID used in error messages ('auto' when the store assigns one)."""
        return self.id or AUTO_ID_LABEL


@dataclass(frozen=True)
class ImportResult:
    """Outcome of one bulk import invocation. Computed once, never persisted."""

    success_count: int = 0
    error_count: int = 0
    errors: list[str] = field(default_factory=list)
