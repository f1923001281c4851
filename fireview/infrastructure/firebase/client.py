"""Firestore store adapter (REST-based, no firebase-admin).

connect_firestore(config) builds a FirestoreStoreAdapter for one project.
Requests authenticate with the web app API key, so they are subject to the
project's security rules exactly like the browser SDK. When
FIREBASE_SERVICE_ACCOUNT_KEY (JSON string) or FIREBASE_SERVICE_ACCOUNT_PATH
(file path) is set, a service account bearer token is used instead.
"""

import json
import logging
from pathlib import Path

from fireview.core.config import Settings, get_settings
from fireview.domain.entities import ConnectionConfig, DocumentData, DocumentRecord
from fireview.domain.exceptions import ConfigException
from fireview.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    _get_credentials,
)
from fireview.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)


def _load_key_dict(settings: Settings) -> dict | None:
    """Return service account dict from env key or file path, or None if unset."""
    key_json = (
        settings.firebase_service_account_key.get_secret_value()
        if settings.firebase_service_account_key
        else None
    )
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ConfigException(["firebase_service_account_key (not valid JSON)"]) from e
    path = settings.firebase_service_account_path
    if path:
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            logger.warning(
                "FIREBASE_SERVICE_ACCOUNT_PATH set but file not found: %s (resolved: %s)",
                path,
                resolved,
            )
            return None
        with open(resolved, encoding="utf-8") as f:
            return json.load(f)
    return None


class FirestoreStoreAdapter:
    """Document store handle for one project (implements IDocumentStore)."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client

    @property
    def project_id(self) -> str:
        return self._client.project_id

    @traced("firestore.list_documents")
    async def list_documents(self, collection_path: str) -> list[DocumentRecord]:
        """Return every document in the collection."""
        coll = self._client.collection(collection_path)
        return [
            DocumentRecord(id=snapshot.id, data=snapshot.to_dict())
            async for snapshot in coll.stream()
        ]

    @traced("firestore.get_document")
    async def get_document(
        self, collection_path: str, document_id: str
    ) -> DocumentRecord | None:
        """Return one document or None if missing."""
        snapshot = await self._client.collection(collection_path).document(document_id).get()
        if snapshot is None:
            return None
        return DocumentRecord(id=snapshot.id, data=snapshot.to_dict())

    @traced("firestore.create_document")
    async def create_document(
        self,
        collection_path: str,
        data: DocumentData,
        document_id: str | None = None,
    ) -> str:
        """Upsert at document_id, or create with a server-assigned ID."""
        coll = self._client.collection(collection_path)
        if document_id:
            await coll.document(document_id).set(data)
            return document_id
        ref = await coll.add(data)
        return ref.id

    @traced("firestore.merge_update_document")
    async def merge_update_document(
        self, collection_path: str, document_id: str, data: DocumentData
    ) -> None:
        """Merge top-level fields into an existing document."""
        await self._client.collection(collection_path).document(document_id).update(data)

    @traced("firestore.delete_document")
    async def delete_document(self, collection_path: str, document_id: str) -> None:
        """Delete a document (no existence check)."""
        await self._client.collection(collection_path).document(document_id).delete()

    async def aclose(self) -> None:
        """Close the HTTP connection pool."""
        await self._client.aclose()
        logger.info("Firestore HTTP client closed for project %s", self.project_id)


async def connect_firestore(
    config: ConnectionConfig, settings: Settings | None = None
) -> FirestoreStoreAdapter:
    """Initialize a Firestore handle for config (REST API + optional google-auth).

    Like the browser SDK's initializeApp, this performs no network call;
    authentication and rule failures surface on the first request.

    Raises:
        ConfigException: If the service account settings are unusable.
    """
    settings = settings or get_settings()
    key_dict = _load_key_dict(settings)
    credentials = None
    if key_dict:
        try:
            credentials = _get_credentials(key_dict)
        except ValueError as e:
            raise ConfigException([f"firebase_service_account ({e})"]) from e
        sa_project = key_dict.get("project_id")
        if sa_project and sa_project != config.project_id:
            logger.warning(
                "Service account belongs to project %s but connecting to %s",
                sa_project,
                config.project_id,
            )
    client = FirestoreRESTClient(
        config.project_id,
        api_key=config.api_key,
        credentials=credentials,
        timeout=settings.firestore_timeout_seconds,
        page_size=settings.firestore_page_size,
    )
    logger.info(
        "Firestore client initialized for project %s (auth=%s)",
        config.project_id,
        "service_account" if credentials else "api_key",
    )
    return FirestoreStoreAdapter(client)

