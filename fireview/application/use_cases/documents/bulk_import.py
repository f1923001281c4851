"""Bulk import of a JSON array of documents.

The payload is parsed and shape-checked up front (all-or-nothing: nothing is
written if any element is invalid). Items are then written strictly one
after another; a failed item is recorded and the import moves on. The
collection is refetched once at the end if anything was written.
"""

from __future__ import annotations

import json
from typing import Any

from fireview.application.services.notifications import NotificationCenter
from fireview.application.use_cases.connection import ConnectionManager
from fireview.application.use_cases.documents.mutations import InFlightTracker, Refresher
from fireview.domain.entities import ImportItem, ImportResult
from fireview.domain.enums import OperationKind
from fireview.domain.exceptions import (
    FireviewException,
    ImportParseException,
    ImportShapeException,
    ValidationException,
)
from fireview.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

NOT_CONNECTED_ERROR = "Not connected to Firestore."


def _to_item(element: Any, index: int) -> ImportItem:
    if not isinstance(element, dict):
        raise ImportShapeException(index)
    data = dict(element)
    raw_id = data.pop("id", None)
    return ImportItem(data=data, id=raw_id if isinstance(raw_id, str) and raw_id else None)


def parse_import_payload(text: str, max_bytes: int | None = None) -> list[ImportItem]:
    """Parse a JSON array of objects into import items.

    A string "id" key becomes the explicit document ID; a non-string id is
    treated as absent. Either way the key is removed from the data.

    Raises:
        ValidationException: payload exceeds max_bytes.
        ImportParseException: not valid JSON, or not a top-level array.
        ImportShapeException: an element is not an object.
    """
    if max_bytes is not None and len(text.encode("utf-8")) > max_bytes:
        raise ValidationException(
            f"File size must be less than {max_bytes // (1024 * 1024) or 1}MB.",
            field="json_array_data",
        )
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise ImportParseException(f"Could not parse JSON: {e.msg} (line {e.lineno}).") from e
    if not isinstance(parsed, list):
        raise ImportParseException("Input must be a JSON array.")
    return [_to_item(element, index) for index, element in enumerate(parsed)]


class BulkImportPipeline:
    """Writes parsed import items into one collection."""

    def __init__(
        self,
        connection: ConnectionManager,
        notifications: NotificationCenter,
        refresh: Refresher,
        in_flight: InFlightTracker,
    ) -> None:
        self._connection = connection
        self._notifications = notifications
        self._refresh = refresh
        self._in_flight = in_flight

    async def run(self, collection: str, items: list[ImportItem]) -> ImportResult:
        """Import items sequentially and return the tally.

        Not connected: every item counts as failed and nothing is written.
        Empty input: nothing is written and nothing is refetched.
        """
        store = self._connection.store
        if store is None:
            self._notifications.error("Not Connected", "Please connect to Firestore first.")
            result = ImportResult(0, len(items), [NOT_CONNECTED_ERROR])
            self._report(collection, items, result)
            return result
        if not items:
            result = ImportResult()
            self._report(collection, items, result)
            return result

        success_count = 0
        errors: list[str] = []
        with self._in_flight.exclusive(OperationKind.BULK_IMPORT):
            for item in items:
                try:
                    await store.create_document(collection, item.data, item.id)
                except Exception as e:
                    logger.error("Error importing document (ID: %s): %s", item.label, e)
                    message = e.message if isinstance(e, FireviewException) else str(e)
                    errors.append(message or f"Failed to import document (ID: {item.label}).")
                else:
                    success_count += 1

            if success_count > 0:
                await self._refresh(collection)

        result = ImportResult(success_count, len(errors), errors)
        logger.info(
            "Bulk import into %s: %d succeeded, %d failed",
            collection,
            result.success_count,
            result.error_count,
        )
        self._report(collection, items, result)
        return result

    def _report(self, collection: str, items: list[ImportItem], result: ImportResult) -> None:
        if result.success_count > 0:
            self._notifications.notify(
                "Bulk Import Success",
                f"{result.success_count} document(s) imported successfully to {collection}.",
            )
        if result.error_count > 0:
            first = f"First error: {result.errors[0]}" if result.errors else ""
            self._notifications.error(
                "Bulk Import Partially Failed",
                f"{result.error_count} document(s) failed to import. {first}".strip(),
            )
        if not items:
            self._notifications.notify("Bulk Import", "No documents provided in the JSON array.")
