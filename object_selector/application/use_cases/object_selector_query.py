"""Object selector query use case: validate, apply preview state, execute, serialize."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from object_selector.application.dtos.post import PageTreeQuery, PostQueryArgs
from object_selector.application.dtos.result import FlatQueryResult, TreeQueryResult
from object_selector.application.services.page_tree_walker import walk_page_tree
from object_selector.domain.enums import QueryMode
from object_selector.domain.exceptions import (
    CannotShowTreeForMultiplePostTypesException,
    CannotShowTreeForNonHierarchicalPostTypeException,
    UnrecognizedPostTypeException,
)
from object_selector.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from object_selector.application.dtos.post_query import ValidatedQuery
    from object_selector.application.interfaces.repositories import IPostRepository
    from object_selector.application.interfaces.services import (
        ICapabilityChecker,
        ITypeStatusRegistry,
    )
    from object_selector.application.services.hooks import PreviewState, SelectorHooks
    from object_selector.application.services.query_validator import PostQueryValidator
    from object_selector.application.services.result_serializer import ResultSerializer

logger = logging.getLogger(__name__)

DEFAULT_TREE_SORT_COLUMN = "post_title"


def resolve_query_mode(query: ValidatedQuery) -> QueryMode:
    """Tree mode only for an empty search with a non-empty tree sub-description."""
    if query.search.strip() == "" and not query.tree_args.is_empty:
        return QueryMode.TREE
    return QueryMode.FLAT


class ObjectSelectorQueryService:
    """Run one selector query for the current caller (request-scoped, read-only)."""

    def __init__(
        self,
        validator: PostQueryValidator,
        post_repo: IPostRepository,
        registry: ITypeStatusRegistry,
        serializer: ResultSerializer,
        hooks: SelectorHooks,
        default_posts_per_page: int = 10,
    ) -> None:
        self.validator = validator
        self.post_repo = post_repo
        self.registry = registry
        self.serializer = serializer
        self.hooks = hooks
        self.default_posts_per_page = default_posts_per_page

    async def run(
        self,
        raw: Mapping[str, Any],
        capabilities: ICapabilityChecker,
        customized: Mapping[str, Any] | None = None,
    ) -> FlatQueryResult | TreeQueryResult:
        """Validate raw query args and execute them. Raises SelectorException on rejection."""
        query = self.validator.validate(raw, capabilities, self.registry)
        preview = self.hooks.run_preview_callbacks(customized or {})
        if resolve_query_mode(query) is QueryMode.TREE:
            return await self.build_post_tree(query, preview)
        return await self.query_posts(query, preview)

    @traced("object_selector.query_posts")
    async def query_posts(self, query: ValidatedQuery, preview: PreviewState) -> FlatQueryResult:
        """Flat mode: one page of matches plus whether more pages follow."""
        per_page = (
            query.posts_per_page
            if query.posts_per_page is not None
            else self.default_posts_per_page
        )
        args = PostQueryArgs(
            post_type=query.post_type,
            post_status=query.post_status,
            search=query.search,
            post__in=query.post__in,
            post__not_in=query.post__not_in,
            meta_clauses=query.meta_clauses(),
            meta_key=query.meta_key,
            orderby=query.orderby,
            order=query.order,
            paged=query.paged,
            posts_per_page=per_page,
            update_post_meta_cache=query.include_featured_images,
        )
        page = await self.post_repo.query_posts(args)
        posts = preview.apply_all(page.posts, query.post_status)
        results = await self.serializer.serialize_flat(
            posts,
            multiple_post_types=query.is_multiple_post_types,
            include_featured_images=query.include_featured_images,
        )
        more = query.paged < page.max_num_pages
        add_span_attributes(found_posts=page.found_posts, more=more)
        logger.debug(
            "Flat selector query: types=%s page=%d found=%d more=%s",
            query.post_type,
            query.paged,
            page.found_posts,
            more,
        )
        return FlatQueryResult(results=results, more=more)

    @traced("object_selector.build_post_tree")
    async def build_post_tree(self, query: ValidatedQuery, preview: PreviewState) -> TreeQueryResult:
        """Tree mode: every object of one hierarchical type, depth-annotated in pre-order."""
        if len(query.post_type) != 1:
            raise CannotShowTreeForMultiplePostTypesException(query.post_type)
        post_type = query.post_type[0]
        type_obj = self.registry.get_post_type(post_type)
        if type_obj is None:
            raise UnrecognizedPostTypeException(post_type)
        if not type_obj.hierarchical:
            raise CannotShowTreeForNonHierarchicalPostTypeException(post_type)

        pages = await self.post_repo.get_pages(
            PageTreeQuery(
                post_type=post_type,
                post_status=query.post_status,
                exclude_tree=query.tree_args.exclude_tree or [],
                sort_column=query.tree_args.sort_column or DEFAULT_TREE_SORT_COLUMN,
            )
        )
        pages = preview.apply_all(pages, query.post_status)
        items = walk_page_tree(pages)
        add_span_attributes(tree_size=len(items))
        logger.debug("Tree selector query: type=%s items=%d", post_type, len(items))
        return TreeQueryResult(results=self.serializer.serialize_tree(items))
