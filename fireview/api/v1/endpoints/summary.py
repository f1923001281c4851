"""Summary API: latest summary and summary generation."""

from fastapi import APIRouter, Request

from fireview.api.v1.dependencies import SessionDep
from fireview.core.limiter import limit_summary
from fireview.schemas.summary import SummaryRequest, SummaryResponse

router = APIRouter()


@router.get("", response_model=SummaryResponse)
async def get_summary(session: SessionDep) -> SummaryResponse:
    """Latest summary, cleared whenever a new fetch starts."""
    return SummaryResponse(
        collection=session.summary.collection,
        summary=session.summary.summary,
        is_summarizing=session.summary.is_summarizing,
    )


@router.post("", response_model=SummaryResponse)
@limit_summary
async def generate_summary(
    request: Request,
    session: SessionDep,
    body: SummaryRequest | None = None,
) -> SummaryResponse:
    """Summarize the cached documents with the language model."""
    collection = body.collection if body else None
    await session.summarize(collection)
    return SummaryResponse(
        collection=session.summary.collection,
        summary=session.summary.summary,
        is_summarizing=session.summary.is_summarizing,
    )
