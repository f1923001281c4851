"""Service interfaces (ports) for the application layer.

Protocols define the contracts the console session relies on: the
document store adapter, the prompt service and the local state store.
Infrastructure provides the implementations; tests provide fakes.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from fireview.domain.entities import ConnectionConfig, DocumentData, DocumentRecord


class IDocumentStore(Protocol):
    """Protocol for a connected document store handle.

    Every method raises a FireviewException subclass on failure
    (AuthenticationException, PermissionDeniedException,
    ResourceNotFoundException, StoreException).
    """

    async def list_documents(self, collection_path: str) -> list[DocumentRecord]:
        """Return every document in the collection (empty list if none)."""

    async def get_document(
        self, collection_path: str, document_id: str
    ) -> DocumentRecord | None:
        """Return one document, or None if it does not exist."""

    async def create_document(
        self,
        collection_path: str,
        data: DocumentData,
        document_id: str | None = None,
    ) -> str:
        """Create a document and return its ID.

        With document_id the write is an upsert that silently replaces any
        existing document at that ID; without it the store assigns an ID.
        """

    async def merge_update_document(
        self, collection_path: str, document_id: str, data: DocumentData
    ) -> None:
        """Write only the given top-level fields of an existing document."""

    async def delete_document(self, collection_path: str, document_id: str) -> None:
        """Delete a document unconditionally."""

    async def aclose(self) -> None:
        """Release transport resources."""


# Store initializer: config in, connected handle out (raises ConfigException etc.).
StoreConnector = Callable[[ConnectionConfig], Awaitable[IDocumentStore]]


class IPromptService(Protocol):
    """Protocol for a templated language-model completion."""

    async def complete(self, template_name: str, variables: dict[str, str]) -> dict[str, Any]:
        """Render template_name with variables and return the structured output.

        Raises PromptServiceException on any failure.
        """


class IStateStore(Protocol):
    """Protocol for local key-value state that survives restarts."""

    async def get(self, key: str) -> Any:
        """Return the stored value or None."""

    async def set(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value."""

    async def remove(self, key: str) -> None:
        """Delete key if present."""
