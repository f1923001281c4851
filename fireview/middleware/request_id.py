"""Request ID and access log middleware (raw ASGI).

Each HTTP request gets an ID: the client's X-Request-ID when it is a short
token of [A-Za-z0-9_-], otherwise a fresh UUID4. The ID is stored in
request.state (error bodies echo it), returned in the response header, and
written on one access log line per request with status and duration.
"""

import logging
import re
import time
import uuid
from typing import Callable

logger = logging.getLogger("fireview.access")

REQUEST_ID_MAX_LENGTH = 64
_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,%d}$" % REQUEST_ID_MAX_LENGTH)

# Polled by the console page; logged at DEBUG only.
_QUIET_PATHS = frozenset({"/api/v1/notifications", "/api/v1/health"})


def sanitize_request_id(raw: str | None) -> str:
    """Return the stripped client value if it is a safe token, else a new UUID4."""
    candidate = (raw or "").strip()
    if _REQUEST_ID_RE.match(candidate):
        return candidate
    return str(uuid.uuid4())


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    header_key = header_name.lower().encode("latin-1")

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        raw = next(
            (v.decode("latin-1") for k, v in scope.get("headers", []) if k.lower() == header_key),
            None,
        )
        request_id = sanitize_request_id(raw)
        scope.setdefault("state", {})["request_id"] = request_id
        started = time.perf_counter()
        status = 500

        async def send_with_id(message: dict) -> None:
            nonlocal status
            if message["type"] == "http.response.start":
                status = message["status"]
                message["headers"] = [
                    *message.get("headers", []),
                    (header_key, request_id.encode("latin-1")),
                ]
            await send(message)

        try:
            await app(scope, receive, send_with_id)
        finally:
            path = scope.get("path", "")
            level = logging.DEBUG if path in _QUIET_PATHS and status < 400 else logging.INFO
            logger.log(
                level,
                "%s %s -> %d in %.1fms [%s]",
                scope.get("method", "-"),
                path,
                status,
                (time.perf_counter() - started) * 1000,
                request_id,
            )

    return asgi_app
