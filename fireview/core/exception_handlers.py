"""Exception handlers: every error leaves the API as {error, message, details}.

Domain errors are mapped by error_code; the console page shows `message`
verbatim, so it is always the adapter's or validator's own text. Bodies
carry the request ID set by RequestIDMiddleware for log correlation.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from fireview.core.config import get_settings
from fireview.domain.exceptions import FireviewException

logger = logging.getLogger(__name__)

_ERROR_CODE_STATUS: dict[str, int] = {
    # Rejected before any store call
    "VALIDATION_ERROR": 400,
    "CONFIG_ERROR": 400,
    "IMPORT_PARSE_ERROR": 400,
    "IMPORT_SHAPE_ERROR": 400,
    "EMPTY_COLLECTION": 400,
    # Session state
    "NOT_CONNECTED": 409,
    "OPERATION_IN_PROGRESS": 409,
    # Firestore answers
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "STORE_ERROR": 502,
    "PROMPT_SERVICE_ERROR": 502,
    # Local disk
    "STATE_STORE_ERROR": 500,
}


def status_for(exc: FireviewException) -> int:
    """HTTP status for a domain exception (400 when the code is unmapped)."""
    return _ERROR_CODE_STATUS.get(exc.error_code, 400)


def _body(request: Request, error: str, message: Any, details: Any = None) -> dict[str, Any]:
    body: dict[str, Any] = {"error": error, "message": message, "details": details or {}}
    request_id = getattr(getattr(request, "state", None), "request_id", None)
    if request_id:
        body["request_id"] = request_id
    return body


def _fireview_exception_handler(request: Request, exc: FireviewException) -> JSONResponse:
    status = status_for(exc)
    if status >= 500:
        logger.warning("%s on %s: %s", exc.error_code, request.url.path, exc.message)
    return JSONResponse(
        status_code=status,
        content=_body(request, exc.error_code, exc.message, jsonable_encoder(exc.details)),
    )


def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=_body(
            request,
            "VALIDATION_ERROR",
            "Request validation failed",
            {"errors": jsonable_encoder(exc.errors())},
        ),
    )


def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_body(request, "HTTP_ERROR", exc.detail),
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """500 with the exception text only when DEBUG is on."""
    logger.exception("Unhandled exception: %s", exc)
    message = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(status_code=500, content=_body(request, "INTERNAL_ERROR", message))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FireviewException, _fireview_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
