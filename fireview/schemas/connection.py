"""Connection API schemas."""

from pydantic import BaseModel, Field

from fireview.domain.enums import ConnectionStatus


class ConnectRequest(BaseModel):
    """Request body for POST /connection.

    An empty project ID is rejected by the session (400), not by the schema,
    so the operator gets the same message the console shows.
    """

    project_id: str = Field(..., max_length=128, description="Firebase project ID")


class ConnectionConfigResponse(BaseModel):
    """Active connection config, without the API key."""

    project_id: str
    auth_domain: str
    storage_bucket: str
    messaging_sender_id: str
    app_id: str
    measurement_id: str | None = None


class InFlightResponse(BaseModel):
    """Operations currently running in the session."""

    fetch: bool = False
    add: bool = False
    update: list[str] = Field(default_factory=list, description="Document IDs being updated")
    delete: list[str] = Field(default_factory=list, description="Document IDs being deleted")
    bulk_import: bool = False
    summary: bool = False


class ConnectionStatusResponse(BaseModel):
    """Response for GET/POST/DELETE /connection."""

    status: ConnectionStatus
    is_connected: bool
    is_connecting: bool
    project_id: str | None = None
    error: str | None = None
    config: ConnectionConfigResponse | None = None
    selected_collection: str | None = None
    in_flight: InFlightResponse = Field(default_factory=InFlightResponse)
