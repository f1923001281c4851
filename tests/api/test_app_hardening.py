"""App-level tests: error handler safety, settings validation, lifespan."""

import json
import os
from unittest.mock import patch

import pytest
from fastapi import FastAPI

from fireview.application.session import ConsoleSession
from fireview.core.config import get_settings
from fireview.core.constants import STATE_KEY_COLLECTIONS, STATE_KEY_PROJECT_ID
from fireview.core.exception_handlers import _generic_exception_handler, status_for
from fireview.core.lifespan import create_lifespan
from fireview.domain.exceptions import (
    ConfigException,
    NotConnectedException,
    OperationInProgressException,
    PromptServiceException,
)
from fireview.infrastructure.exceptions import StateStoreException
from fireview.infrastructure.persistence import MemoryStateStore

from tests.fakes import FakeConnector, FakePromptService, FakeStore


def test_500_response_hides_details_when_debug_false() -> None:
    class FakeRequest:
        pass

    with patch("fireview.core.exception_handlers.get_settings") as m_get_settings:
        m_get_settings.return_value.debug = False
        response = _generic_exception_handler(FakeRequest(), ValueError("sensitive"))
    body = json.loads(response.body.decode())
    assert response.status_code == 500
    assert body == {"error": "INTERNAL_ERROR", "message": "Internal server error", "details": {}}


@pytest.mark.parametrize(
    "exc,status",
    [
        (ConfigException(["api_key"]), 400),
        (NotConnectedException(), 409),
        (OperationInProgressException("update", "a"), 409),
        (PromptServiceException("down"), 502),
        (StateStoreException("/tmp/s.json", "disk full"), 500),
    ],
)
def test_error_codes_map_to_statuses(exc, status: int) -> None:
    assert status_for(exc) == status


def test_settings_reject_out_of_range_page_size() -> None:
    with patch.dict(os.environ, {"FIRESTORE_PAGE_SIZE": "5000"}, clear=False):
        get_settings.cache_clear()
        try:
            with pytest.raises(ValueError, match="firestore_page_size"):
                get_settings()
        finally:
            get_settings.cache_clear()


@pytest.mark.asyncio
async def test_lifespan_restores_and_closes_existing_session(settings) -> None:
    store = FakeStore({"users": {"a": {"n": 1}}})
    prompt_service = FakePromptService()
    state_store = MemoryStateStore(
        {STATE_KEY_PROJECT_ID: "demo", STATE_KEY_COLLECTIONS: [{"name": "users"}]}
    )
    session = ConsoleSession(
        connector=FakeConnector(store),
        prompt_service=prompt_service,
        state_store=state_store,
        settings_provider=lambda: settings,
    )
    app = FastAPI()
    app.state.session = session

    async with create_lifespan(app):
        assert session.connection.is_connected
        assert session.collections.names == ["users"]

    assert store.closed is True
    assert prompt_service.closed is True
