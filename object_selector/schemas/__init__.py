"""Pydantic API schemas (HTTP request/response shapes)."""

from object_selector.schemas.health import HealthResponse
from object_selector.schemas.object_selector import (
    FlatQueryResponse,
    NonceResponse,
    ObjectSelectorErrorResponse,
    ObjectSelectorQueryResponse,
    TreeQueryResponse,
)

__all__ = [
    "FlatQueryResponse",
    "HealthResponse",
    "NonceResponse",
    "ObjectSelectorErrorResponse",
    "ObjectSelectorQueryResponse",
    "TreeQueryResponse",
]
