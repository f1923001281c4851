"""Console session: one operator's view of one Firestore project.

Wires the connection state machine, collection registry, document cache,
mutations, bulk import and summary together, and reacts to selection
changes by fetching (or clearing) the cached documents. One instance is
created per process by the app lifespan.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fireview.application.interfaces import IPromptService, IStateStore, StoreConnector
from fireview.application.services import NotificationCenter, filter_documents
from fireview.application.use_cases.collections import CollectionRegistry
from fireview.application.use_cases.connection import ConnectionManager
from fireview.application.use_cases.documents import (
    BulkImportPipeline,
    DocumentCache,
    InFlightTracker,
    MutationOrchestrator,
    parse_import_payload,
)
from fireview.application.use_cases.summary import SummaryRequester
from fireview.core.config import Settings, get_settings
from fireview.domain.entities import ConnectionConfig, DocumentData, DocumentRecord, ImportResult
from fireview.domain.enums import OperationKind
from fireview.domain.exceptions import (
    FireviewException,
    ImportParseException,
    ImportShapeException,
    ResourceNotFoundException,
    ValidationException,
)
from fireview.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class ConsoleSession:
    """All console state for the current process."""

    def __init__(
        self,
        connector: StoreConnector,
        prompt_service: IPromptService,
        state_store: IStateStore,
        settings_provider: Callable[[], Settings] = get_settings,
    ) -> None:
        settings = settings_provider()
        self._import_max_bytes = settings.import_max_bytes
        self._prompt_service = prompt_service
        self.notifications = NotificationCenter(settings.notification_limit)
        self.connection = ConnectionManager(
            connector, state_store, self.notifications, settings_provider
        )
        self.collections = CollectionRegistry(state_store)
        self.summary = SummaryRequester(
            prompt_service, self.notifications, settings.summary_max_chars
        )
        self.cache = DocumentCache(self.notifications, on_fetch_started=self.summary.clear)
        self.in_flight = InFlightTracker()
        self.mutations = MutationOrchestrator(
            self.connection, self.notifications, self._refetch_if_selected, self.in_flight
        )
        self.bulk_import = BulkImportPipeline(
            self.connection, self.notifications, self._refetch_if_selected, self.in_flight
        )

    @property
    def last_error(self) -> FireviewException | None:
        """Failure of the most recent add, update or delete, if any."""
        return self.mutations.last_error

    @property
    def selected_collection(self) -> str | None:
        return self.collections.selected

    # Lifecycle

    async def restore(self) -> None:
        """Load persisted collections and reconnect to the last project.

        A failed reconnect is logged and notified; it never raises.
        """
        await self.collections.load()
        project_id = await self.connection.stored_project_id()
        if not project_id:
            return
        logger.info("Restoring connection to Firestore project %s", project_id)
        try:
            await self.connect(project_id)
        except FireviewException as e:
            logger.warning("Could not restore connection to %s: %s", project_id, e.message)

    async def aclose(self) -> None:
        await self.connection.aclose()
        aclose = getattr(self._prompt_service, "aclose", None)
        if aclose is not None:
            await aclose()

    # Connection

    async def connect(self, project_id: str) -> ConnectionConfig:
        config = await self.connection.connect(project_id)
        if self.collections.selected:
            await self.fetch_documents(self.collections.selected)
        return config

    async def disconnect(self) -> None:
        """Close the connection and clear all in-memory console state."""
        await self.connection.disconnect()
        self.collections.clear()
        self.cache.clear()
        self.summary.clear()

    # Collections

    async def _selection_changed(self) -> None:
        selected = self.collections.selected
        if selected and self.connection.is_connected:
            await self.fetch_documents(selected)
        else:
            self.cache.clear(clear_error=self.connection.is_connected)
            self.summary.clear()

    async def add_collection(self, name: str) -> list[str]:
        if await self.collections.add(name):
            await self._selection_changed()
        return self.collections.names

    async def remove_collection(self, name: str) -> list[str]:
        if await self.collections.remove(name):
            self.cache.clear()
            self.summary.clear()
            await self._selection_changed()
        return self.collections.names

    async def select_collection(self, name: str | None) -> str | None:
        if self.collections.select(name):
            await self._selection_changed()
        return self.collections.selected

    def resolve_collection(self, collection: str | None) -> str:
        name = (collection or "").strip() or self.collections.selected
        if not name:
            raise ValidationException("No collection selected.", field="collection")
        return name

    # Documents

    async def fetch_documents(self, collection: str | None = None) -> bool:
        """Refetch collection (default: the selected one); no-op when disconnected."""
        return await self.cache.fetch(self.connection.store, self.resolve_collection(collection))

    async def _refetch_if_selected(self, collection: str) -> None:
        # The cache only ever holds the selected collection.
        if collection == self.collections.selected:
            await self.fetch_documents(collection)

    async def refresh(self) -> bool:
        self.connection.require_store()
        return await self.fetch_documents()

    def documents_view(
        self,
        search: str | None = None,
        field: str | None = None,
        value: str | None = None,
    ) -> dict[str, Any]:
        """Filtered view of the cache plus fetch state."""
        documents = filter_documents(self.cache.documents, search, field, value)
        return {
            "collection": self.cache.collection or self.collections.selected,
            "documents": documents,
            "displayed_count": len(documents),
            "original_count": len(self.cache.documents),
            "is_fetching": self.cache.is_fetching,
            "error": self.cache.error,
        }

    async def get_document(self, document_id: str, collection: str | None = None) -> DocumentRecord:
        store = self.connection.require_store()
        name = self.resolve_collection(collection)
        record = await store.get_document(name, document_id)
        if record is None:
            raise ResourceNotFoundException("document", f"{name}/{document_id}")
        return record

    async def add_document(
        self,
        data: DocumentData,
        document_id: str | None = None,
        collection: str | None = None,
    ) -> str | None:
        return await self.mutations.add_document(
            self.resolve_collection(collection), data, document_id
        )

    async def update_document(
        self, document_id: str, data: DocumentData, collection: str | None = None
    ) -> bool:
        return await self.mutations.update_document(
            self.resolve_collection(collection), document_id, data
        )

    async def delete_document(self, document_id: str, collection: str | None = None) -> bool:
        return await self.mutations.delete_document(
            self.resolve_collection(collection), document_id
        )

    async def import_json(self, json_array_data: str, collection: str | None = None) -> ImportResult:
        """Parse a JSON array payload and import it into collection.

        Parse and shape errors are notified and raised before any write.
        """
        name = self.resolve_collection(collection)
        try:
            items = parse_import_payload(json_array_data, self._import_max_bytes)
        except (ImportParseException, ImportShapeException, ValidationException) as e:
            logger.error("Invalid JSON array data for bulk import: %s", e.message)
            self.notifications.error("Invalid JSON for Import", e.message)
            raise
        return await self.bulk_import.run(name, items)

    # Summary

    async def summarize(self, collection: str | None = None) -> str:
        name = self.resolve_collection(collection)
        if self.cache.collection not in (None, name):
            raise ValidationException(
                f"Documents of {name} are not loaded. Select the collection first.",
                field="collection",
            )
        return await self.summary.summarize(name, self.cache.documents)

    # Reports

    def status(self) -> dict[str, Any]:
        report = self.connection.report()
        report["selected_collection"] = self.collections.selected
        report["in_flight"] = {
            "fetch": self.cache.is_fetching,
            "add": self.in_flight.is_running(OperationKind.ADD),
            "update": self.in_flight.document_ids(OperationKind.UPDATE),
            "delete": self.in_flight.document_ids(OperationKind.DELETE),
            "bulk_import": self.in_flight.is_running(OperationKind.BULK_IMPORT),
            "summary": self.summary.is_summarizing,
        }
        return report
