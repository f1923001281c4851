"""API v1."""

from fireview.api.v1.router import api_router

__all__ = ["api_router"]
