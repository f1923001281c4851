"""Async Firestore REST v1 client used by the store adapter.

Authenticates either with the web app API key (requests are then subject to
Firestore security rules, like the browser SDK) or with service account
credentials via google-auth. All HTTP calls use httpx.AsyncClient so they
do not block the event loop.
"""

from __future__ import annotations

import asyncio
import json
import re
from collections.abc import AsyncIterator
from typing import Any
from urllib.parse import quote

import httpx

from fireview.domain.exceptions import (
    AuthenticationException,
    PermissionDeniedException,
    ResourceNotFoundException,
    StoreException,
)
from fireview.infrastructure.firebase._rest_encoding import (
    decode_document,
    document_id_from_name,
    encode_document,
)

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
_BASE = "https://firestore.googleapis.com/v1"

# Field paths that need no backtick quoting in an update mask.
_SIMPLE_FIELD_PATH_RE = re.compile(r"^[A-Za-z_][A-Za-z_0-9]*$")


def _get_credentials(key_dict: dict):
    """Service account credentials scoped to Firestore."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[_FIRESTORE_SCOPE]
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


def _quote_path(path: str) -> str:
    """URL-quote each segment of a slash-delimited collection/document path."""
    return "/".join(quote(segment, safe="") for segment in path.strip("/").split("/"))


def _quote_field_path(field: str) -> str:
    """Return a field path usable in updateMask (backticks for non-identifiers)."""
    if _SIMPLE_FIELD_PATH_RE.match(field):
        return field
    escaped = field.replace("\\", "\\\\").replace("`", "\\`")
    return f"`{escaped}`"


def _error_message(resp: httpx.Response) -> str:
    """Extract the server's error message from a Firestore error body."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(body, list) and body:
        body = body[0]
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return f"HTTP {resp.status_code}"


def _raise_for_status(resp: httpx.Response, resource_type: str, resource_id: str) -> None:
    """Map a non-2xx Firestore response to a domain exception."""
    if resp.status_code < 400:
        return
    server_message = _error_message(resp)
    if resp.status_code == 401:
        raise AuthenticationException(
            "Authentication required. Please ensure you are connected and authenticated. "
            f"({server_message})"
        )
    if resp.status_code == 403:
        raise PermissionDeniedException(
            f"Permission denied for {resource_type} '{resource_id}'. "
            f"Check your Firestore rules. ({server_message})"
        )
    if resp.status_code == 404:
        raise ResourceNotFoundException(resource_type, resource_id)
    raise StoreException(
        f"Firestore request for {resource_type} '{resource_id}' failed: {server_message}",
        status_code=resp.status_code,
    )


class DocumentSnapshot:
    """Decoded document as returned by get/stream."""

    def __init__(self, id_: str, data: dict):
        self.id = id_
        self._data = data

    def to_dict(self) -> dict:
        return self._data


class DocumentReference:
    """One document at collection_path/document_id."""

    def __init__(self, client: "FirestoreRESTClient", collection_path: str, document_id: str):
        self._client = client
        self._collection_path = collection_path
        self.id = document_id

    @property
    def path(self) -> str:
        return f"{self._collection_path}/{self.id}"

    @property
    def _url(self) -> str:
        return f"{self._client.documents_url}/{_quote_path(self._collection_path)}/{quote(self.id, safe='')}"

    async def set(self, data: dict[str, Any]) -> None:
        """Create or overwrite the document (PATCH without mask = full replace)."""
        resp = await self._client.request("PATCH", self._url, body=encode_document(data))
        _raise_for_status(resp, "document", self.path)

    async def update(self, data: dict[str, Any]) -> None:
        """Merge the given top-level fields into an existing document.

        Fields not listed in data are left untouched. Fails with
        ResourceNotFoundException when the document does not exist.
        """
        params: list[tuple[str, str]] = [
            ("updateMask.fieldPaths", _quote_field_path(k)) for k in data
        ]
        params.append(("currentDocument.exists", "true"))
        resp = await self._client.request(
            "PATCH", self._url, body=encode_document(data), params=params
        )
        _raise_for_status(resp, "document", self.path)

    async def get(self) -> DocumentSnapshot | None:
        """Read the document, or None when it does not exist."""
        resp = await self._client.request("GET", self._url)
        if resp.status_code == 404:
            return None
        _raise_for_status(resp, "document", self.path)
        out = resp.json()
        return DocumentSnapshot(self.id, decode_document(out.get("fields")))

    async def delete(self) -> None:
        """Delete the document. Idempotent if document is already missing."""
        resp = await self._client.request("DELETE", self._url)
        _raise_for_status(resp, "document", self.path)


class CollectionReference:
    """A collection path, possibly nested (users/alice/posts)."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self.path = path.strip("/")

    @property
    def _url(self) -> str:
        return f"{self._client.documents_url}/{_quote_path(self.path)}"

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(self._client, self.path, document_id)

    async def add(self, data: dict[str, Any]) -> DocumentReference:
        """Create a document with a server-assigned ID and return its reference."""
        resp = await self._client.request("POST", self._url, body=encode_document(data))
        _raise_for_status(resp, "collection", self.path)
        name = resp.json().get("name", "")
        return self.document(document_id_from_name(name))

    async def stream(self, page_size: int | None = None) -> AsyncIterator[DocumentSnapshot]:
        """List every document in the collection (shallow), following page tokens."""
        page_token: str | None = None
        size = page_size or self._client.page_size
        while True:
            params: dict[str, Any] = {"pageSize": size}
            if page_token:
                params["pageToken"] = page_token
            resp = await self._client.request("GET", self._url, params=params)
            _raise_for_status(resp, "collection", self.path)
            out = resp.json() if resp.content else {}
            for doc in out.get("documents", []):
                yield DocumentSnapshot(
                    document_id_from_name(doc.get("name", "")),
                    decode_document(doc.get("fields")),
                )
            page_token = out.get("nextPageToken")
            if not page_token:
                return


class FirestoreRESTClient:
    """Firestore v1 REST client bound to one project's (default) database."""

    def __init__(
        self,
        project_id: str,
        *,
        api_key: str | None = None,
        credentials=None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
        page_size: int = 300,
    ) -> None:
        self.project_id = project_id
        self._api_key = api_key
        self._credentials = credentials
        self.page_size = page_size
        self.documents_url = (
            f"{_BASE}/projects/{quote(project_id, safe='')}/databases/(default)/documents"
        )
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the connection pool unless it was injected by the caller."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str | None:
        """Return a valid access token, or None when using the API key only.

        Refreshes in a thread pool to avoid blocking the event loop.
        """
        if self._credentials is None:
            return None
        from google.auth.exceptions import GoogleAuthError

        try:
            return await asyncio.to_thread(_get_access_token, self._credentials)
        except GoogleAuthError as e:
            raise AuthenticationException(f"Service account token refresh failed: {e}") from e

    async def request(
        self,
        method: str,
        url: str,
        *,
        body: dict | None = None,
        params: Any = None,
    ) -> httpx.Response:
        """Perform an authenticated request; transport errors become StoreException."""
        headers = {"Content-Type": "application/json"}
        token = await self.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        query = httpx.QueryParams(params or {})
        if self._api_key and not token:
            query = query.set("key", self._api_key)
        try:
            return await self._http.request(
                method,
                url,
                headers=headers,
                params=query,
                content=json.dumps(body).encode() if body is not None else None,
            )
        except httpx.HTTPError as e:
            raise StoreException(f"Could not reach Firestore: {e}") from e

    def collection(self, path: str) -> CollectionReference:
        return CollectionReference(self, path)
