"""Summary API schemas."""

from pydantic import BaseModel, Field


class SummaryRequest(BaseModel):
    """Request body for POST /summary."""

    collection: str | None = Field(default=None, description="Defaults to the selected collection")


class SummaryResponse(BaseModel):
    """Latest summary (null until one has been generated)."""

    collection: str | None = None
    summary: str | None = None
    is_summarizing: bool = False
