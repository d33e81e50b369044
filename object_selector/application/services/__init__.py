"""Application services: validation, tree walking, serialization, hooks."""

from object_selector.application.services.hooks import PreviewState, SelectorHooks
from object_selector.application.services.page_tree_walker import walk_page_tree
from object_selector.application.services.query_validator import PostQueryValidator
from object_selector.application.services.result_serializer import ResultSerializer

__all__ = [
    "PostQueryValidator",
    "PreviewState",
    "ResultSerializer",
    "SelectorHooks",
    "walk_page_tree",
]
