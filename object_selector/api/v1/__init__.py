"""API version 1."""

from object_selector.api.v1.router import api_router

__all__ = ["api_router"]
