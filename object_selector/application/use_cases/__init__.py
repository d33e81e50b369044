"""Application use cases."""

from object_selector.application.use_cases.object_selector_query import (
    ObjectSelectorQueryService,
    resolve_query_mode,
)

__all__ = ["ObjectSelectorQueryService", "resolve_query_mode"]
