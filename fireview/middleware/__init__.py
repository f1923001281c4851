"""ASGI middleware."""

from fireview.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
