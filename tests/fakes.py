"""In-memory fakes for the document store, prompt service and store connector."""

import asyncio
from typing import Any

from fireview.domain.entities import ConnectionConfig, DocumentRecord
from fireview.domain.exceptions import PromptServiceException, ResourceNotFoundException


class FakeStore:
    """In-memory IDocumentStore recording every call.

    create_failures maps the 1-based index of a create_document call to the
    exception it raises; errors maps a method name to an exception raised on
    every call; gates hold list_documents for a collection until set.
    """

    def __init__(self, collections: dict[str, dict[str, dict]] | None = None) -> None:
        self.collections: dict[str, dict[str, dict]] = collections or {}
        self.calls: list[tuple[Any, ...]] = []
        self.errors: dict[str, Exception] = {}
        self.create_failures: dict[int, Exception] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self.closed = False
        self._creates = 0
        self._auto_ids = 0

    def count(self, method: str) -> int:
        return sum(1 for call in self.calls if call[0] == method)

    def _check(self, method: str) -> None:
        if method in self.errors:
            raise self.errors[method]

    async def list_documents(self, collection_path: str) -> list[DocumentRecord]:
        self.calls.append(("list", collection_path))
        gate = self.gates.get(collection_path)
        if gate is not None:
            await gate.wait()
        self._check("list")
        docs = self.collections.get(collection_path, {})
        return [DocumentRecord(id=doc_id, data=dict(data)) for doc_id, data in docs.items()]

    async def get_document(self, collection_path: str, document_id: str) -> DocumentRecord | None:
        self.calls.append(("get", collection_path, document_id))
        self._check("get")
        data = self.collections.get(collection_path, {}).get(document_id)
        return None if data is None else DocumentRecord(id=document_id, data=dict(data))

    async def create_document(
        self, collection_path: str, data: dict, document_id: str | None = None
    ) -> str:
        self._creates += 1
        self.calls.append(("create", collection_path, document_id, dict(data)))
        self._check("create")
        if self._creates in self.create_failures:
            raise self.create_failures[self._creates]
        if document_id is None:
            self._auto_ids += 1
            document_id = f"auto-{self._auto_ids}"
        self.collections.setdefault(collection_path, {})[document_id] = dict(data)
        return document_id

    async def merge_update_document(self, collection_path: str, document_id: str, data: dict) -> None:
        self.calls.append(("update", collection_path, document_id, dict(data)))
        gate = self.gates.get(f"update:{document_id}")
        if gate is not None:
            await gate.wait()
        self._check("update")
        docs = self.collections.get(collection_path, {})
        if document_id not in docs:
            raise ResourceNotFoundException("document", f"{collection_path}/{document_id}")
        docs[document_id].update(data)

    async def delete_document(self, collection_path: str, document_id: str) -> None:
        self.calls.append(("delete", collection_path, document_id))
        self._check("delete")
        self.collections.get(collection_path, {}).pop(document_id, None)

    async def aclose(self) -> None:
        self.closed = True


class FakePromptService:
    """IPromptService returning a fixed summary, or raising error when set."""

    def __init__(self, summary: str = "A short summary.") -> None:
        self.summary = summary
        self.error: PromptServiceException | None = None
        self.calls: list[tuple[str, dict[str, str]]] = []
        self.closed = False

    async def complete(self, template_name: str, variables: dict[str, str]) -> dict[str, Any]:
        self.calls.append((template_name, dict(variables)))
        if self.error is not None:
            raise self.error
        return {"summary": self.summary}

    async def aclose(self) -> None:
        self.closed = True


class FakeConnector:
    """StoreConnector handing out `store`; raises `error` when set."""

    def __init__(self, store: FakeStore) -> None:
        self.store = store
        self.error: Exception | None = None
        self.configs: list[ConnectionConfig] = []

    async def __call__(self, config: ConnectionConfig) -> FakeStore:
        self.configs.append(config)
        if self.error is not None:
            raise self.error
        return self.store


