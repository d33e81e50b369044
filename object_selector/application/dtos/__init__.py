"""Application DTOs (no ORM dependency)."""

from object_selector.application.dtos.caller import CallerIdentity
from object_selector.application.dtos.post import (
    PageTreeQuery,
    PostQueryArgs,
    PostQueryResult,
    PostResult,
)
from object_selector.application.dtos.post_query import MetaClause, TreeArgs, ValidatedQuery
from object_selector.application.dtos.result import (
    FlatQueryResult,
    ResultRecord,
    TreeItem,
    TreeQueryResult,
)

__all__ = [
    "CallerIdentity",
    "FlatQueryResult",
    "MetaClause",
    "PageTreeQuery",
    "PostQueryArgs",
    "PostQueryResult",
    "PostResult",
    "ResultRecord",
    "TreeArgs",
    "TreeItem",
    "TreeQueryResult",
    "ValidatedQuery",
]
