"""Collection registry API schemas."""

from pydantic import BaseModel, Field


class CollectionCreate(BaseModel):
    """Request body for POST /collections."""

    name: str = Field(..., max_length=1500, description="Slash-delimited collection path")


class CollectionSelect(BaseModel):
    """Request body for PUT /collections/selected (null clears the selection)."""

    name: str | None = None


class CollectionEntry(BaseModel):
    name: str


class CollectionListResponse(BaseModel):
    """Registered collections in display order plus the current selection."""

    collections: list[CollectionEntry]
    selected: str | None = None
