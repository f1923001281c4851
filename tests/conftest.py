"""Pytest configuration and fixtures for fireview.

The console session is built from in-memory fakes (document store, prompt
service, state store) so no test touches Firestore or Gemini. HTTP tests
use fireview.main:app with the session placed on app.state (ASGITransport
does not run the lifespan).
"""

import pytest
from httpx import ASGITransport, AsyncClient

from fireview.application.session import ConsoleSession
from fireview.core.config import Settings
from fireview.core.limiter import limiter
from fireview.infrastructure.persistence import MemoryStateStore
from fireview.main import app

from tests.fakes import FakeConnector, FakePromptService, FakeStore


@pytest.fixture
def settings() -> Settings:
    """Settings with every Firebase credential present (no .env)."""
    return Settings(
        _env_file=None,
        firebase_api_key="test-api-key",
        firebase_auth_domain="demo.firebaseapp.com",
        firebase_storage_bucket="demo.appspot.com",
        firebase_messaging_sender_id="1234567890",
        firebase_app_id="1:1234567890:web:abc",
        state_file="",
    )


@pytest.fixture
def store() -> FakeStore:
    return FakeStore(
        {
            "users": {
                "alice": {"name": "Alice", "age": 30, "active": True},
                "bob": {"name": "Bob", "age": 25, "email": None},
            },
            "orders": {"o1": {"total": 12.5}},
        }
    )


@pytest.fixture
def connector(store: FakeStore) -> FakeConnector:
    return FakeConnector(store)


@pytest.fixture
def prompt_service() -> FakePromptService:
    return FakePromptService()


@pytest.fixture
def state_store() -> MemoryStateStore:
    return MemoryStateStore()


@pytest.fixture
def session(
    settings: Settings,
    connector: FakeConnector,
    prompt_service: FakePromptService,
    state_store: MemoryStateStore,
) -> ConsoleSession:
    """Fresh, disconnected console session over the fakes."""
    return ConsoleSession(
        connector=connector,
        prompt_service=prompt_service,
        state_store=state_store,
        settings_provider=lambda: settings,
    )


@pytest.fixture
async def connected_session(session: ConsoleSession) -> ConsoleSession:
    """Session connected to project 'demo' with 'users' registered and selected."""
    await session.connect("demo")
    await session.add_collection("users")
    session.notifications.drain()
    return session


@pytest.fixture
async def client(session: ConsoleSession) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) using the fake session."""
    app.state.session = session
    limiter.enabled = False
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        limiter.enabled = True
        app.state.session = None
