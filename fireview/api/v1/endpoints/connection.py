"""Connection API: status, connect to a project, disconnect."""

from fastapi import APIRouter, Request

from fireview.api.v1.dependencies import SessionDep
from fireview.core.limiter import limit_writes
from fireview.schemas.connection import ConnectionStatusResponse, ConnectRequest

router = APIRouter()


@router.get("", response_model=ConnectionStatusResponse)
async def get_connection(session: SessionDep) -> ConnectionStatusResponse:
    """Return connection status, active config and in-flight operations."""
    return ConnectionStatusResponse.model_validate(session.status())


@router.post("", response_model=ConnectionStatusResponse)
@limit_writes
async def connect(
    request: Request,
    body: ConnectRequest,
    session: SessionDep,
) -> ConnectionStatusResponse:
    """Connect to a Firestore project using environment credentials.

    Fetches the selected collection once connected.
    """
    await session.connect(body.project_id)
    return ConnectionStatusResponse.model_validate(session.status())


@router.delete("", response_model=ConnectionStatusResponse)
@limit_writes
async def disconnect(request: Request, session: SessionDep) -> ConnectionStatusResponse:
    """Disconnect and clear collections, documents and summary."""
    await session.disconnect()
    return ConnectionStatusResponse.model_validate(session.status())
