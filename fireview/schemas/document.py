"""Document API schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DocumentItem(BaseModel):
    """One document: ID plus field data (timestamps as ISO-8601, bytes as base64)."""

    model_config = ConfigDict(from_attributes=True, ser_json_bytes="base64")

    id: str
    data: dict[str, Any] = Field(default_factory=dict)


class DocumentListResponse(BaseModel):
    """Response for GET /documents: filtered view of the cached collection."""

    collection: str | None = None
    documents: list[DocumentItem]
    displayed_count: int
    original_count: int
    is_fetching: bool = False
    error: str | None = None


class DocumentCreate(BaseModel):
    """Request body for POST /documents.

    With document_id the write is an upsert that replaces any existing
    document at that ID.
    """

    collection: str | None = Field(default=None, description="Defaults to the selected collection")
    document_id: str | None = Field(default=None, max_length=1500)
    data: dict[str, Any]


class DocumentUpdate(BaseModel):
    """Request body for PATCH /documents/{id}: only the listed fields are written."""

    collection: str | None = Field(default=None, description="Defaults to the selected collection")
    data: dict[str, Any]


class DocumentCreateResponse(BaseModel):
    id: str
    collection: str


class DocumentMutationResponse(BaseModel):
    """Response for update and delete."""

    id: str
    collection: str
    success: bool = True


class BulkImportRequest(BaseModel):
    """Request body for POST /documents/import: the raw JSON array text."""

    collection: str | None = Field(default=None, description="Defaults to the selected collection")
    json_array_data: str = Field(..., description="JSON array of objects; optional string 'id' per item")


class BulkImportResponse(BaseModel):
    """Import tally; errors hold one message per failed item."""

    model_config = ConfigDict(from_attributes=True)

    success_count: int = Field(..., ge=0)
    error_count: int = Field(..., ge=0)
    errors: list[str] = Field(default_factory=list)
