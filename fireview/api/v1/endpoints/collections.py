"""Collection registry API: list, register, unregister, select."""

from fastapi import APIRouter, Query, Request

from fireview.api.v1.dependencies import SessionDep
from fireview.application.session import ConsoleSession
from fireview.core.limiter import limit_writes
from fireview.schemas.collection import (
    CollectionCreate,
    CollectionEntry,
    CollectionListResponse,
    CollectionSelect,
)

router = APIRouter()


def _listing(session: ConsoleSession) -> CollectionListResponse:
    return CollectionListResponse(
        collections=[CollectionEntry(name=name) for name in session.collections.names],
        selected=session.selected_collection,
    )


@router.get("", response_model=CollectionListResponse)
async def list_collections(session: SessionDep) -> CollectionListResponse:
    """Registered collections in display order."""
    return _listing(session)


@router.post("", response_model=CollectionListResponse, status_code=201)
@limit_writes
async def add_collection(
    request: Request,
    body: CollectionCreate,
    session: SessionDep,
) -> CollectionListResponse:
    """Register a collection path (no-op if empty or already registered)."""
    await session.add_collection(body.name)
    return _listing(session)


@router.delete("", response_model=CollectionListResponse)
@limit_writes
async def remove_collection(
    request: Request,
    session: SessionDep,
    name: str = Query(..., description="Exact collection name to unregister"),
) -> CollectionListResponse:
    """Unregister a collection; selection moves to the first remaining entry."""
    await session.remove_collection(name)
    return _listing(session)


@router.put("/selected", response_model=CollectionListResponse)
@limit_writes
async def select_collection(
    request: Request,
    body: CollectionSelect,
    session: SessionDep,
) -> CollectionListResponse:
    """Select a registered collection (fetches its documents) or clear the selection."""
    await session.select_collection(body.name)
    return _listing(session)
