"""DTOs for content store reads (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime

from object_selector.application.dtos.post_query import MetaClause


@dataclass(frozen=True)
class PostResult:
    """Content object read-model returned by the post repository.

    meta is only populated when the query asked for the meta cache
    (featured images); otherwise it is empty.
    """

    id: int
    post_author: int
    post_date_gmt: datetime | None
    post_title: str
    post_name: str
    post_status: str
    post_type: str
    post_parent: int = 0
    menu_order: int = 0
    post_mime_type: str = ""
    meta: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PostQueryArgs:
    """Store-level flat query. posts_per_page -1 disables paging."""

    post_type: list[str]
    post_status: list[str]
    search: str = ""
    post__in: list[int] | None = None
    post__not_in: list[int] | None = None
    meta_clauses: list[MetaClause] = field(default_factory=list)
    meta_key: str | None = None  # used by orderby meta_value / meta_value_num
    orderby: str | dict[str, str] | None = None
    order: str | None = None
    paged: int = 1
    posts_per_page: int = 10
    update_post_meta_cache: bool = False


@dataclass(frozen=True)
class PostQueryResult:
    """One page of posts plus the full match count."""

    posts: list[PostResult]
    found_posts: int
    max_num_pages: int


@dataclass(frozen=True)
class PageTreeQuery:
    """Store-level hierarchical fetch (all depths) for one post type."""

    post_type: str
    post_status: list[str]
    exclude_tree: list[int] = field(default_factory=list)
    sort_column: str = "post_title"
    sort_order: str = "ASC"
