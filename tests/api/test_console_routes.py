"""HTTP tests for the console API over the in-memory fakes."""

import json

import pytest
from httpx import AsyncClient

from fireview.application.session import ConsoleSession
from fireview.core.constants import STATE_KEY_PROJECT_ID
from fireview.domain.exceptions import PermissionDeniedException, StoreException

from tests.fakes import FakeConnector, FakePromptService, FakeStore

pytestmark = pytest.mark.asyncio


async def _titles(client: AsyncClient) -> list[str]:
    response = await client.get("/api/v1/notifications")
    assert response.status_code == 200
    return [n["title"] for n in response.json()]


# Connection


async def test_connect_and_disconnect(client: AsyncClient, state_store) -> None:
    response = await client.post("/api/v1/connection", json={"project_id": "demo"})
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "connected"
    assert body["is_connected"] is True
    assert body["config"]["project_id"] == "demo"
    assert body["config"]["auth_domain"] == "demo.firebaseapp.com"
    assert "api_key" not in body["config"]
    assert await state_store.get(STATE_KEY_PROJECT_ID) == "demo"
    assert await _titles(client) == ["Success"]

    response = await client.delete("/api/v1/connection")
    assert response.status_code == 200
    assert response.json()["status"] == "disconnected"
    assert await state_store.get(STATE_KEY_PROJECT_ID) is None
    assert await _titles(client) == ["Disconnected"]


async def test_connect_requires_project_id(client: AsyncClient) -> None:
    response = await client.post("/api/v1/connection", json={"project_id": "  "})
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"
    assert response.json()["message"] == "Project ID cannot be empty."
    assert await _titles(client) == ["Connection Error"]


async def test_connect_failure_maps_adapter_error(
    client: AsyncClient, connector: FakeConnector
) -> None:
    connector.error = PermissionDeniedException("Check your Firestore rules.")
    response = await client.post("/api/v1/connection", json={"project_id": "demo"})
    assert response.status_code == 403

    status = (await client.get("/api/v1/connection")).json()
    assert status["status"] == "connect_failed"
    assert status["error"] == "Check your Firestore rules."


async def test_connect_request_validation(client: AsyncClient) -> None:
    response = await client.post("/api/v1/connection", json={})
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


# Collections


async def test_collection_registry_routes(
    client: AsyncClient, connected_session: ConsoleSession, store: FakeStore
) -> None:
    response = await client.post("/api/v1/collections", json={"name": " orders "})
    assert response.status_code == 201
    assert response.json() == {
        "collections": [{"name": "users"}, {"name": "orders"}],
        "selected": "users",
    }

    response = await client.put("/api/v1/collections/selected", json={"name": "orders"})
    assert response.json()["selected"] == "orders"
    view = (await client.get("/api/v1/documents")).json()
    assert view["collection"] == "orders"
    assert [d["id"] for d in view["documents"]] == ["o1"]

    response = await client.delete("/api/v1/collections", params={"name": "orders"})
    assert response.json()["selected"] == "users"
    assert store.calls[-1] == ("list", "users")


async def test_select_unregistered_collection(
    client: AsyncClient, connected_session: ConsoleSession
) -> None:
    response = await client.put("/api/v1/collections/selected", json={"name": "nope"})
    assert response.status_code == 400
    assert "not registered" in response.json()["message"]


# Documents


async def test_list_documents_with_filters(
    client: AsyncClient, connected_session: ConsoleSession
) -> None:
    view = (await client.get("/api/v1/documents")).json()
    assert view["original_count"] == 2
    assert view["displayed_count"] == 2

    view = (await client.get("/api/v1/documents", params={"search": "ALICE"})).json()
    assert [d["id"] for d in view["documents"]] == ["alice"]
    assert view["original_count"] == 2

    view = (await client.get("/api/v1/documents", params={"field": "age", "value": "25"})).json()
    assert [d["id"] for d in view["documents"]] == ["bob"]


async def test_refresh_requires_connection(client: AsyncClient, session: ConsoleSession) -> None:
    await session.add_collection("users")
    response = await client.post("/api/v1/documents/refresh")
    assert response.status_code == 409
    assert response.json()["error"] == "NOT_CONNECTED"


async def test_create_document_without_selection(client: AsyncClient) -> None:
    response = await client.post("/api/v1/documents", json={"data": {"a": 1}})
    assert response.status_code == 400
    assert response.json()["message"] == "No collection selected."


async def test_create_update_delete_document(
    client: AsyncClient, connected_session: ConsoleSession, store: FakeStore
) -> None:
    response = await client.post("/api/v1/documents", json={"data": {"name": "Carol"}})
    assert response.status_code == 201
    assert response.json() == {"id": "auto-1", "collection": "users"}

    response = await client.post(
        "/api/v1/documents", json={"data": {"name": "Dan"}, "document_id": "dan"}
    )
    assert response.json()["id"] == "dan"

    response = await client.patch("/api/v1/documents/alice", json={"data": {"age": 31}})
    assert response.status_code == 200
    assert response.json() == {"id": "alice", "collection": "users", "success": True}
    assert store.collections["users"]["alice"] == {"name": "Alice", "age": 31, "active": True}

    response = await client.delete("/api/v1/documents/bob")
    assert response.status_code == 200
    assert "bob" not in store.collections["users"]

    view = (await client.get("/api/v1/documents")).json()
    assert sorted(d["id"] for d in view["documents"]) == ["alice", "auto-1", "dan"]
    assert await _titles(client) == [
        "Document Added",
        "Document Added",
        "Document Updated",
        "Document Deleted",
    ]


async def test_update_missing_document_returns_404(
    client: AsyncClient, connected_session: ConsoleSession
) -> None:
    response = await client.patch("/api/v1/documents/ghost", json={"data": {"a": 1}})
    assert response.status_code == 404
    assert response.json()["error"] == "RESOURCE_NOT_FOUND"
    assert await _titles(client) == ["Update Document Error"]


async def test_unexpected_store_error_returns_502(
    client: AsyncClient, connected_session: ConsoleSession, store: FakeStore
) -> None:
    store.errors["create"] = RuntimeError("malformed response")
    response = await client.post("/api/v1/documents", json={"data": {"a": 1}})
    assert response.status_code == 502
    assert response.json()["error"] == "STORE_ERROR"
    assert response.json()["message"] == "malformed response"
    assert await _titles(client) == ["Add Document Error"]


async def test_store_failure_returns_502(
    client: AsyncClient, connected_session: ConsoleSession, store: FakeStore
) -> None:
    store.errors["delete"] = StoreException("Firestore unavailable")
    response = await client.delete("/api/v1/documents/alice")
    assert response.status_code == 502
    assert response.json()["message"] == "Firestore unavailable"


async def test_mutation_when_disconnected_returns_409(
    client: AsyncClient, session: ConsoleSession
) -> None:
    await session.add_collection("users")
    response = await client.delete("/api/v1/documents/alice")
    assert response.status_code == 409
    assert await _titles(client) == ["Not Connected"]


async def test_get_document(client: AsyncClient, connected_session: ConsoleSession) -> None:
    response = await client.get("/api/v1/documents/alice")
    assert response.status_code == 200
    assert response.json() == {"id": "alice", "data": {"name": "Alice", "age": 30, "active": True}}

    response = await client.get("/api/v1/documents/ghost")
    assert response.status_code == 404


# Bulk import


async def test_import_documents(
    client: AsyncClient, connected_session: ConsoleSession, store: FakeStore
) -> None:
    payload = json.dumps([{"id": "x1", "n": 1}, {"n": 2}])
    response = await client.post("/api/v1/documents/import", json={"json_array_data": payload})
    assert response.status_code == 200
    assert response.json() == {"success_count": 2, "error_count": 0, "errors": []}
    assert store.collections["users"]["x1"] == {"n": 1}
    assert await _titles(client) == ["Bulk Import Success"]


async def test_import_rejects_invalid_payload(
    client: AsyncClient, connected_session: ConsoleSession, store: FakeStore
) -> None:
    response = await client.post("/api/v1/documents/import", json={"json_array_data": "{oops"})
    assert response.status_code == 400
    assert response.json()["error"] == "IMPORT_PARSE_ERROR"

    response = await client.post(
        "/api/v1/documents/import", json={"json_array_data": '[{"a": 1}, 2]'}
    )
    assert response.status_code == 400
    assert response.json()["details"] == {"index": 1}
    assert store.count("create") == 0
    assert await _titles(client) == ["Invalid JSON for Import", "Invalid JSON for Import"]


# Summary


async def test_summary_generate_and_read(
    client: AsyncClient,
    connected_session: ConsoleSession,
    prompt_service: FakePromptService,
) -> None:
    assert (await client.get("/api/v1/summary")).json()["summary"] is None

    response = await client.post("/api/v1/summary", json={})
    assert response.status_code == 200
    assert response.json() == {
        "collection": "users",
        "summary": "A short summary.",
        "is_summarizing": False,
    }
    assert prompt_service.calls[0][1]["collectionName"] == "users"
    assert (await client.get("/api/v1/summary")).json()["summary"] == "A short summary."


async def test_summary_of_empty_collection(
    client: AsyncClient, connected_session: ConsoleSession
) -> None:
    await client.post("/api/v1/collections", json={"name": "empty"})
    await client.put("/api/v1/collections/selected", json={"name": "empty"})
    response = await client.post("/api/v1/summary", json={})
    assert response.status_code == 400
    assert response.json()["error"] == "EMPTY_COLLECTION"


async def test_in_flight_status_is_idle(client: AsyncClient) -> None:
    body = (await client.get("/api/v1/connection")).json()
    assert body["in_flight"] == {
        "fetch": False,
        "add": False,
        "update": [],
        "delete": [],
        "bulk_import": False,
        "summary": False,
    }
