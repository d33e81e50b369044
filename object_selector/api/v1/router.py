"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from object_selector.api.v1.dependencies.
"""

from fastapi import APIRouter

from object_selector.api.v1.endpoints import health, object_selector

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(
    object_selector.router, prefix="/object-selector", tags=["object-selector"]
)
