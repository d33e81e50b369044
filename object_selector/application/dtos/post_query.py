"""DTOs for validated selector queries (no dependency on ORM or HTTP)."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class MetaClause:
    """One meta filter clause. Clauses are always joined by AND.

    A clause without a value (has_value False) matches objects that have the
    key at all. A clause without a key matches any key holding the value.
    """

    key: str | None = None
    value: Any = None
    compare: str = "="
    has_value: bool = False


@dataclass(frozen=True)
class TreeArgs:
    """Tree sub-description. None means the key was not supplied."""

    exclude_tree: list[int] | None = None
    sort_column: str | None = None

    @property
    def is_empty(self) -> bool:
        """True when no tree key was supplied (an empty object selects flat mode)."""
        return self.exclude_tree is None and self.sort_column is None


@dataclass(frozen=True)
class ValidatedQuery:
    """Query description after whitelist filtering, normalization and capability checks.

    Only references registered post types and statuses. posts_per_page is None
    for the configured default, -1 when an id-inclusion list forced an
    unlimited page.
    """

    search: str = ""
    paged: int = 1
    posts_per_page: int | None = None
    post_type: list[str] = field(default_factory=lambda: ["post"])
    post_status: list[str] = field(default_factory=lambda: ["publish"])
    post__in: list[int] | None = None
    post__not_in: list[int] | None = None
    meta_key: str | None = None
    meta_value: Any = None
    meta_compare: str | None = None
    meta_query: list[MetaClause] = field(default_factory=list)
    orderby: str | dict[str, str] | None = None
    order: str | None = None
    include_featured_images: bool = False
    has_private_status: bool = False
    tree_args: TreeArgs = field(default_factory=TreeArgs)

    @property
    def is_multiple_post_types(self) -> bool:
        return len(self.post_type) > 1

    def meta_clauses(self) -> list[MetaClause]:
        """Return all meta clauses: the top-level meta_key/meta_value pair first, then meta_query."""
        clauses: list[MetaClause] = []
        if self.meta_key or self.meta_value is not None:
            clauses.append(
                MetaClause(
                    key=self.meta_key or None,
                    value=self.meta_value,
                    compare=self.meta_compare or "=",
                    has_value=self.meta_value is not None,
                )
            )
        clauses.extend(self.meta_query)
        return clauses
