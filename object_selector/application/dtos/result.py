"""DTOs for selector results (read-model sent to the selector UI)."""

from dataclasses import dataclass
from typing import Any

from object_selector.application.dtos.post import PostResult


@dataclass(frozen=True)
class ResultRecord:
    """One selectable option. depth is set in tree mode only."""

    id: int
    text: str
    title: str
    post_title: str
    post_type: str
    post_status: str
    post_date_gmt: str
    post_author: int
    depth: int | None = None
    featured_image: dict[str, Any] | None = None


@dataclass(frozen=True)
class TreeItem:
    """A post positioned in a hierarchical walk."""

    post: PostResult
    depth: int


@dataclass(frozen=True)
class FlatQueryResult:
    """Flat mode envelope: one page of records and whether more pages follow."""

    results: list[ResultRecord]
    more: bool


@dataclass(frozen=True)
class TreeQueryResult:
    """Tree mode envelope: every record of the hierarchy, depth-annotated."""

    results: list[ResultRecord]
