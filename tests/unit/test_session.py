"""Tests for ConsoleSession wiring: restore, selection, cross-collection writes and summary."""

import json
from unittest.mock import AsyncMock

import pytest

from fireview.application.session import ConsoleSession
from fireview.core.config import Settings
from fireview.core.constants import STATE_KEY_COLLECTIONS, STATE_KEY_PROJECT_ID
from fireview.domain.enums import ConnectionStatus
from fireview.domain.exceptions import AuthenticationException, ValidationException
from fireview.infrastructure.persistence import MemoryStateStore

from tests.fakes import FakePromptService, FakeStore


def _session(settings: Settings, connector: AsyncMock, state_store: MemoryStateStore) -> ConsoleSession:
    return ConsoleSession(
        connector=connector,
        prompt_service=FakePromptService(),
        state_store=state_store,
        settings_provider=lambda: settings,
    )


@pytest.mark.asyncio
async def test_restore_reconnects_to_stored_project(settings: Settings, store: FakeStore) -> None:
    state_store = MemoryStateStore(
        {
            STATE_KEY_PROJECT_ID: "demo",
            STATE_KEY_COLLECTIONS: [{"name": "users"}, {"name": "orders"}],
        }
    )
    connector = AsyncMock(return_value=store)
    session = _session(settings, connector, state_store)

    await session.restore()

    assert session.collections.names == ["users", "orders"]
    assert session.connection.status == ConnectionStatus.CONNECTED
    connector.assert_awaited_once()
    assert connector.await_args.args[0].project_id == "demo"


@pytest.mark.asyncio
async def test_restore_failure_is_reported_not_raised(settings: Settings) -> None:
    state_store = MemoryStateStore({STATE_KEY_PROJECT_ID: "demo"})
    connector = AsyncMock(side_effect=AuthenticationException("Token expired"))
    session = _session(settings, connector, state_store)

    await session.restore()

    assert session.connection.status == ConnectionStatus.CONNECT_FAILED
    assert session.connection.error == "Token expired"
    assert [n.title for n in session.notifications.drain()] == ["Connection Error"]


@pytest.mark.asyncio
async def test_restore_without_stored_project_stays_disconnected(settings: Settings) -> None:
    connector = AsyncMock()
    session = _session(settings, connector, MemoryStateStore())

    await session.restore()

    connector.assert_not_awaited()
    assert session.connection.status == ConnectionStatus.DISCONNECTED


@pytest.mark.asyncio
async def test_connect_fetches_selected_collection(session: ConsoleSession, store: FakeStore) -> None:
    await session.add_collection("users")
    assert store.count("list") == 0

    await session.connect("demo")

    assert store.calls == [("list", "users")]
    assert session.documents_view()["original_count"] == 2


@pytest.mark.asyncio
async def test_clearing_selection_empties_cache(connected_session: ConsoleSession) -> None:
    await connected_session.select_collection(None)
    view = connected_session.documents_view()
    assert view["collection"] is None
    assert view["original_count"] == 0


@pytest.mark.asyncio
async def test_mutation_on_other_collection_leaves_cache_on_selection(
    connected_session: ConsoleSession, store: FakeStore
) -> None:
    lists_before = store.count("list")

    assert await connected_session.add_document({"total": 7}, None, "orders") == "auto-1"

    assert store.count("list") == lists_before
    assert store.collections["orders"]["auto-1"] == {"total": 7}
    assert connected_session.cache.collection == "users"
    assert {doc.id for doc in connected_session.cache.documents} == {"alice", "bob"}


@pytest.mark.asyncio
async def test_import_into_other_collection_leaves_cache_on_selection(
    connected_session: ConsoleSession, store: FakeStore
) -> None:
    result = await connected_session.import_json('[{"total": 3}]', "orders")

    assert result.success_count == 1
    assert ("list", "orders") not in store.calls
    assert connected_session.cache.collection == "users"


@pytest.mark.asyncio
async def test_summary_after_other_collection_write_covers_selection(
    connected_session: ConsoleSession, prompt_service: FakePromptService
) -> None:
    await connected_session.add_document({"total": 7}, None, "orders")

    await connected_session.summarize()

    [(_, variables)] = prompt_service.calls
    assert variables["collectionName"] == "users"
    assert {doc["id"] for doc in json.loads(variables["documentContent"])} == {"alice", "bob"}


@pytest.mark.asyncio
async def test_summarize_collection_not_in_cache_is_rejected(
    connected_session: ConsoleSession, prompt_service: FakePromptService
) -> None:
    with pytest.raises(ValidationException, match="orders"):
        await connected_session.summarize("orders")
    assert prompt_service.calls == []
