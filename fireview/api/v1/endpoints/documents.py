"""Document API: filtered view of the cache, refresh, CRUD and bulk import.

Mutations report failure through the session (notification plus
last_error); the route re-raises last_error so the response carries the
adapter's status and message.
"""

from fastapi import APIRouter, Query, Request

from fireview.api.v1.dependencies import SessionDep
from fireview.application.session import ConsoleSession
from fireview.core.limiter import limit_import, limit_writes
from fireview.domain.exceptions import FireviewException, StoreException
from fireview.schemas.document import (
    BulkImportRequest,
    BulkImportResponse,
    DocumentCreate,
    DocumentCreateResponse,
    DocumentItem,
    DocumentListResponse,
    DocumentMutationResponse,
    DocumentUpdate,
)

router = APIRouter()


def _raise_last_error(session: ConsoleSession, fallback: str) -> None:
    error: FireviewException = session.last_error or StoreException(fallback)
    raise error


def _view(
    session: ConsoleSession, search: str | None, field: str | None, value: str | None
) -> DocumentListResponse:
    view = session.documents_view(search, field, value)
    view["documents"] = [DocumentItem.model_validate(doc) for doc in view["documents"]]
    return DocumentListResponse(**view)


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    session: SessionDep,
    search: str | None = Query(None, description="Case-insensitive text matched against ID and field values"),
    field: str | None = Query(None, description="Field name for the field filter"),
    value: str | None = Query(None, description="Substring the field's value must contain"),
) -> DocumentListResponse:
    """Cached documents of the selected collection, filtered."""
    return _view(session, search, field, value)


@router.post("/refresh", response_model=DocumentListResponse)
@limit_writes
async def refresh_documents(request: Request, session: SessionDep) -> DocumentListResponse:
    """Refetch the selected collection from the store."""
    await session.refresh()
    return _view(session, None, None, None)


@router.post("/import", response_model=BulkImportResponse)
@limit_import
async def import_documents(
    request: Request,
    body: BulkImportRequest,
    session: SessionDep,
) -> BulkImportResponse:
    """Import a JSON array of objects; an optional string 'id' sets the document ID.

    Invalid JSON or a non-object element rejects the whole payload (400).
    Per-item write failures are counted, not raised.
    """
    result = await session.import_json(body.json_array_data, body.collection)
    return BulkImportResponse.model_validate(result)


@router.get("/{document_id}", response_model=DocumentItem)
async def get_document(
    document_id: str,
    session: SessionDep,
    collection: str | None = Query(None, description="Defaults to the selected collection"),
) -> DocumentItem:
    """Read one document directly from the store."""
    record = await session.get_document(document_id, collection)
    return DocumentItem.model_validate(record)


@router.post("", response_model=DocumentCreateResponse, status_code=201)
@limit_writes
async def create_document(
    request: Request,
    body: DocumentCreate,
    session: SessionDep,
) -> DocumentCreateResponse:
    """Create a document (auto ID) or upsert at document_id."""
    collection = session.resolve_collection(body.collection)
    new_id = await session.add_document(body.data, body.document_id, collection)
    if new_id is None:
        _raise_last_error(session, "Could not add document.")
    return DocumentCreateResponse(id=new_id, collection=collection)


@router.patch("/{document_id}", response_model=DocumentMutationResponse)
@limit_writes
async def update_document(
    request: Request,
    document_id: str,
    body: DocumentUpdate,
    session: SessionDep,
) -> DocumentMutationResponse:
    """Merge the given fields into an existing document."""
    collection = session.resolve_collection(body.collection)
    if not await session.update_document(document_id, body.data, collection):
        _raise_last_error(session, "Could not update document.")
    return DocumentMutationResponse(id=document_id, collection=collection)


@router.delete("/{document_id}", response_model=DocumentMutationResponse)
@limit_writes
async def delete_document(
    request: Request,
    document_id: str,
    session: SessionDep,
    collection: str | None = Query(None, description="Defaults to the selected collection"),
) -> DocumentMutationResponse:
    """Delete a document. Confirmation is the caller's job."""
    collection = session.resolve_collection(collection)
    if not await session.delete_document(document_id, collection):
        _raise_last_error(session, "Could not delete document.")
    return DocumentMutationResponse(id=document_id, collection=collection)
