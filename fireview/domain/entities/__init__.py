"""Domain entities.

Pure domain models; no transport or persistence concerns.
"""

from fireview.domain.entities.connection import ConnectionConfig
from fireview.domain.entities.document import (
    DocumentData,
    DocumentRecord,
    FieldValue,
    ImportItem,
    ImportResult,
)

__all__ = [
    "ConnectionConfig",
    "DocumentData",
    "DocumentRecord",
    "FieldValue",
    "ImportItem",
    "ImportResult",
]
