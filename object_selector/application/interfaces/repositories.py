"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from object_selector.application.dtos.post import (
        PageTreeQuery,
        PostQueryArgs,
        PostQueryResult,
        PostResult,
    )


class IPostRepository(Protocol):
    """Protocol for the read-only content store (DIP)."""

    async def query_posts(self, args: PostQueryArgs) -> PostQueryResult:
        """Run a filtered/searched/paginated query and count all matches.

        Raises PostQueryException when the query cannot be built or executed.
        """

    async def get_pages(self, query: PageTreeQuery) -> list[PostResult]:
        """Return every object of one post type (all depths) minus excluded subtrees, sorted."""

    async def get_posts_by_ids(self, ids: list[int], *, with_meta: bool = False) -> dict[int, PostResult]:
        """Return posts keyed by id; missing ids are absent from the result."""
