"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring: telemetry, the console session
(state store, Firestore connector, prompt service) and restoring the last
connection. No business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from fireview.application.session import ConsoleSession
from fireview.core.config import get_settings
from fireview.infrastructure.ai import GeminiPromptService
from fireview.infrastructure.firebase import connect_firestore
from fireview.infrastructure.persistence import create_state_store
from fireview.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


def build_session() -> ConsoleSession:
    """Create the console session with the production adapters."""
    settings = get_settings()
    return ConsoleSession(
        connector=connect_firestore,
        prompt_service=GeminiPromptService.from_settings(settings),
        state_store=create_state_store(settings.state_file),
    )


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, telemetry (if enabled), console session and
    restore of the persisted collections and project. A session already set
    on app.state (tests) is used as is. Shutdown closes the session's
    clients, then telemetry.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    if settings.telemetry_enabled:
        from fireview.shared.telemetry.telemetry import setup_tracing

        setup_tracing(app, settings)

    session = getattr(app.state, "session", None)
    if session is None:
        session = build_session()
        app.state.session = session
    await session.restore()
    logger.info("Console session ready (state: %s)", settings.state_file or "memory")

    yield

    # ---- Shutdown ----
    await session.aclose()
    logger.info("Console session closed")

    if settings.telemetry_enabled:
        from fireview.shared.telemetry.telemetry import shutdown_tracing

        shutdown_tracing()
