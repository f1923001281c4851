"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags.
"""

from fastapi import APIRouter

from fireview.api.v1.endpoints import (
    collections,
    connection,
    documents,
    health,
    notifications,
    summary,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(connection.router, prefix="/connection", tags=["connection"])
api_router.include_router(collections.router, prefix="/collections", tags=["collections"])
api_router.include_router(documents.router, prefix="/documents", tags=["documents"])
api_router.include_router(summary.router, prefix="/summary", tags=["summary"])
api_router.include_router(
    notifications.router, prefix="/notifications", tags=["notifications"]
)
