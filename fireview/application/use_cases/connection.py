"""Connection state machine: the single gate for every data operation.

States are DISCONNECTED, CONNECTING, CONNECTED and CONNECT_FAILED. A
connected handle is replaced only after a new connection succeeds, so a
failed reconnect never drops a working session.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from fireview.application.interfaces import IDocumentStore, IStateStore, StoreConnector
from fireview.application.services.notifications import NotificationCenter
from fireview.core.config import Settings, get_settings
from fireview.core.constants import STATE_KEY_PROJECT_ID
from fireview.domain.entities import ConnectionConfig
from fireview.domain.enums import ConnectionStatus
from fireview.domain.exceptions import (
    ConfigException,
    FireviewException,
    NotConnectedException,
    StoreException,
    ValidationException,
)
from fireview.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class ConnectionManager:
    """Owns the store handle and the active connection config."""

    def __init__(
        self,
        connector: StoreConnector,
        state_store: IStateStore,
        notifications: NotificationCenter,
        settings_provider: Callable[[], Settings] = get_settings,
    ) -> None:
        self._connector = connector
        self._state_store = state_store
        self._notifications = notifications
        self._settings_provider = settings_provider
        self._lock = asyncio.Lock()
        self._store: IDocumentStore | None = None
        self._connecting = False
        self._failed = False
        self.config: ConnectionConfig | None = None
        self.error: str | None = None

    @property
    def status(self) -> ConnectionStatus:
        if self._store is not None:
            return ConnectionStatus.CONNECTED
        if self._connecting:
            return ConnectionStatus.CONNECTING
        if self._failed:
            return ConnectionStatus.CONNECT_FAILED
        return ConnectionStatus.DISCONNECTED

    @property
    def is_connected(self) -> bool:
        return self._store is not None

    @property
    def is_connecting(self) -> bool:
        return self._connecting

    @property
    def project_id(self) -> str | None:
        return self.config.project_id if self.config else None

    @property
    def store(self) -> IDocumentStore | None:
        return self._store

    def require_store(self) -> IDocumentStore:
        """Return the connected handle or raise NotConnectedException."""
        if self._store is None:
            raise NotConnectedException()
        return self._store

    def _record_failure(self, message: str) -> None:
        self.error = message
        if self._store is None:
            self._failed = True

    async def connect(self, project_id: str) -> ConnectionConfig:
        """Validate config, open a store handle and make it current.

        Credentials are read from settings at call time and merged with
        project_id. On any failure the previous state (including an existing
        connection) is kept, the error is recorded and notified, and the
        exception propagates.

        Raises:
            ValidationException: project_id is empty.
            ConfigException: an environment credential is missing.
            FireviewException: the store adapter failed to initialize.
        """
        async with self._lock:
            try:
                config = ConnectionConfig.from_settings(project_id, self._settings_provider())
            except ValidationException as e:
                self.error = e.message
                self._notifications.error("Connection Error", e.message)
                raise
            except ConfigException as e:
                logger.error("Firebase config validation error: %s", e.details)
                self._record_failure(e.message)
                self._notifications.error("Configuration Error", e.message)
                raise

            self._connecting = True
            try:
                store = await self._connector(config)
            except FireviewException as e:
                logger.error("Firestore connection error: %s", e.message)
                self._record_failure(e.message)
                self._notifications.error("Connection Error", e.message)
                raise
            except Exception as e:
                logger.exception("Firestore connection error")
                message = str(e) or "Failed to connect."
                self._record_failure(message)
                self._notifications.error("Connection Error", message)
                raise StoreException(message) from e
            finally:
                self._connecting = False

            previous, self._store = self._store, store
            self.config = config
            self.error = None
            self._failed = False
            if previous is not None and previous is not store:
                await self._close(previous)

            await self._state_store.set(STATE_KEY_PROJECT_ID, config.project_id)
            self._notifications.notify(
                "Success", f"Connected to Firestore project: {config.project_id}."
            )
            logger.info("Connected to Firestore project %s", config.project_id)
            return config

    async def disconnect(self) -> None:
        """Close the handle and forget the connection and persisted project ID."""
        async with self._lock:
            store, self._store = self._store, None
            if store is not None:
                await self._close(store)
            self.config = None
            self.error = None
            self._failed = False
            await self._state_store.remove(STATE_KEY_PROJECT_ID)
            self._notifications.notify("Disconnected", "Disconnected from Firestore.")

    async def aclose(self) -> None:
        """Close the handle on shutdown; persisted state is left as is."""
        async with self._lock:
            store, self._store = self._store, None
            if store is not None:
                await self._close(store)

    async def stored_project_id(self) -> str | None:
        value = await self._state_store.get(STATE_KEY_PROJECT_ID)
        return value if isinstance(value, str) and value.strip() else None

    @staticmethod
    async def _close(store: IDocumentStore) -> None:
        try:
            await store.aclose()
        except Exception:
            logger.warning("Error closing Firestore client", exc_info=True)

    def report(self) -> dict[str, object]:
        """Status snapshot for the connection endpoint."""
        return {
            "status": self.status,
            "is_connected": self.is_connected,
            "is_connecting": self.is_connecting,
            "project_id": self.project_id,
            "error": self.error,
            "config": self.config.public_dict() if self.config else None,
        }
