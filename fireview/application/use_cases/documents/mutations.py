"""Single-document create, update and delete.

Each mutation checks the connection, marks itself in flight, calls the
store, notifies the outcome and refetches the collection on success.
Update and delete hold a per-document token so the same document cannot
be updated (or deleted) twice at once.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from typing import Any

from fireview.application.services.notifications import NotificationCenter
from fireview.application.use_cases.connection import ConnectionManager
from fireview.domain.entities import DocumentData
from fireview.domain.enums import OperationKind
from fireview.domain.exceptions import (
    FireviewException,
    NotConnectedException,
    OperationInProgressException,
    StoreException,
)
from fireview.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

InFlightToken = tuple[OperationKind, str | None]
Refresher = Callable[[str], Awaitable[Any]]


class InFlightTracker:
    """Set of running (operation, document_id) tokens.

    Collection-wide operations use document_id None and are counted, so
    concurrent adds are allowed while each one is still visible.
    """

    def __init__(self) -> None:
        self._tokens: set[InFlightToken] = set()
        self._counts: dict[OperationKind, int] = {}

    def __contains__(self, token: object) -> bool:
        return token in self._tokens

    def is_running(self, kind: OperationKind) -> bool:
        return self._counts.get(kind, 0) > 0 or any(t[0] == kind for t in self._tokens)

    def document_ids(self, kind: OperationKind) -> list[str]:
        return sorted(doc_id for k, doc_id in self._tokens if k == kind and doc_id)

    @contextmanager
    def exclusive(self, kind: OperationKind, document_id: str | None = None) -> Iterator[None]:
        """Hold a token; raise OperationInProgressException if already held."""
        token = (kind, document_id)
        if token in self._tokens:
            raise OperationInProgressException(kind.value, document_id)
        self._tokens.add(token)
        try:
            yield
        finally:
            self._tokens.discard(token)

    @contextmanager
    def shared(self, kind: OperationKind) -> Iterator[None]:
        """Count a collection-wide operation for its duration."""
        self._counts[kind] = self._counts.get(kind, 0) + 1
        try:
            yield
        finally:
            self._counts[kind] -= 1


class MutationOrchestrator:
    """Create, merge-update and delete documents of a collection."""

    def __init__(
        self,
        connection: ConnectionManager,
        notifications: NotificationCenter,
        refresh: Refresher,
        in_flight: InFlightTracker | None = None,
    ) -> None:
        self._connection = connection
        self._notifications = notifications
        self._refresh = refresh
        self.in_flight = in_flight or InFlightTracker()
        self.last_error: FireviewException | None = None

    def _not_connected(self) -> None:
        self.last_error = NotConnectedException()
        self._notifications.error("Not Connected", self.last_error.message)

    def _failed(self, title: str, fallback: str, error: Exception) -> None:
        if not isinstance(error, FireviewException):
            logger.exception("Unexpected store error: %s", title)
            error = StoreException(str(error) or fallback)
        self.last_error = error
        self._notifications.error(title, error.message or fallback)

    async def add_document(
        self,
        collection: str,
        data: DocumentData,
        document_id: str | None = None,
    ) -> str | None:
        """Create a document (auto ID) or upsert it at document_id.

        Returns the new document ID, or None on failure / when not connected.
        """
        self.last_error = None
        store = self._connection.store
        if store is None:
            self._not_connected()
            return None
        with self.in_flight.shared(OperationKind.ADD):
            try:
                new_id = await store.create_document(collection, data, document_id or None)
            except Exception as e:
                logger.error("Error adding document to %s: %s", collection, e)
                self._failed("Add Document Error", "Could not add document.", e)
                return None
            self._notifications.notify(
                "Document Added", f"Document {new_id} added to {collection}."
            )
            await self._refresh(collection)
            return new_id

    async def update_document(
        self, collection: str, document_id: str, data: DocumentData
    ) -> bool:
        """Merge data into an existing document. Returns True on success."""
        self.last_error = None
        store = self._connection.store
        if store is None:
            self._not_connected()
            return False
        with self.in_flight.exclusive(OperationKind.UPDATE, document_id):
            try:
                await store.merge_update_document(collection, document_id, data)
            except Exception as e:
                logger.error("Error updating document %s/%s: %s", collection, document_id, e)
                self._failed("Update Document Error", "Could not update document.", e)
                return False
            self._notifications.notify(
                "Document Updated", f"Document {document_id} in {collection} updated."
            )
            await self._refresh(collection)
            return True

    async def delete_document(self, collection: str, document_id: str) -> bool:
        """Delete a document unconditionally. Returns True on success."""
        self.last_error = None
        store = self._connection.store
        if store is None:
            self._not_connected()
            return False
        with self.in_flight.exclusive(OperationKind.DELETE, document_id):
            try:
                await store.delete_document(collection, document_id)
            except Exception as e:
                logger.error("Error deleting document %s/%s: %s", collection, document_id, e)
                self._failed("Delete Document Error", "Could not delete document.", e)
                return False
            self._notifications.notify(
                "Document Deleted", f"Document {document_id} from {collection} deleted."
            )
            await self._refresh(collection)
            return True
