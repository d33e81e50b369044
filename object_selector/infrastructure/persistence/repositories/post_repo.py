"""Post repository: read-only flat and hierarchical queries over posts/postmeta."""

from __future__ import annotations

import logging
import math
import operator
import re
from collections.abc import Callable, Iterable
from typing import Any

from sqlalchemy import Float, and_, case, cast, exists, func, not_, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql.elements import ColumnElement

from object_selector.application.dtos.post import (
    PageTreeQuery,
    PostQueryArgs,
    PostQueryResult,
    PostResult,
)
from object_selector.application.dtos.post_query import MetaClause
from object_selector.domain.exceptions import PostQueryException
from object_selector.infrastructure.persistence.models.post import Post, PostMeta
from object_selector.shared.utils import ensure_utc

logger = logging.getLogger(__name__)

_SEARCH_TERM_RE = re.compile(r'"[^"]*"|\S+')

# Signed 64-bit INTEGER range shared by SQLite and PostgreSQL bigint.
_MAX_SQL_INT = 2**63 - 1

_META_OPERATORS: dict[str, Callable[[Any, Any], ColumnElement[bool]]] = {
    "=": operator.eq,
    "!=": operator.ne,
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
}

# orderby token -> column; "post_" prefixed aliases are added below.
_ORDERBY_COLUMNS: dict[str, Any] = {
    "ID": Post.id,
    "id": Post.id,
    "name": Post.post_name,
    "author": Post.post_author,
    "date": Post.post_date_gmt,
    "title": Post.post_title,
    "modified": Post.post_modified_gmt,
    "parent": Post.post_parent,
    "menu_order": Post.menu_order,
    "comment_count": Post.comment_count,
}
_ORDERBY_COLUMNS.update(
    {
        f"post_{k}": v
        for k, v in list(_ORDERBY_COLUMNS.items())
        if k in ("name", "author", "date", "title", "modified", "parent")
    }
)
_ORDERBY_SPECIAL = frozenset({"none", "rand", "relevance", "post__in", "meta_value", "meta_value_num"})

# sort_column values accepted for hierarchical fetches.
_SORT_COLUMNS: dict[str, Any] = {
    "post_title": Post.post_title,
    "post_name": Post.post_name,
    "post_author": Post.post_author,
    "post_date": Post.post_date_gmt,
    "post_date_gmt": Post.post_date_gmt,
    "post_modified": Post.post_modified_gmt,
    "post_modified_gmt": Post.post_modified_gmt,
    "post_parent": Post.post_parent,
    "menu_order": Post.menu_order,
    "comment_count": Post.comment_count,
    "ID": Post.id,
}


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so the value matches literally (escape char is backslash)."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _parse_search_terms(search: str) -> list[str]:
    """Split a search string into terms; quoted phrases stay whole."""
    terms = []
    for match in _SEARCH_TERM_RE.findall(search):
        term = match.strip('"').strip()
        if term and term != "-":
            terms.append(term)
    return terms


def _meta_value_literal(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, (str, int, float)):
        return str(value)
    raise PostQueryException(
        "Meta query values must be scalars",
        "invalid_meta_query",
        {"value": value},
    )


def _direction(order: str | None, default: str = "DESC") -> str:
    if isinstance(order, str) and order.upper() in ("ASC", "DESC"):
        return order.upper()
    return default


def _apply_direction(column: Any, direction: str) -> Any:
    return column.asc() if direction == "ASC" else column.desc()


def _to_result(post: Post, *, with_meta: bool = False) -> PostResult:
    meta: dict[str, str] = {}
    if with_meta:
        for row in post.meta:
            if row.meta_key is not None and row.meta_key not in meta:
                meta[row.meta_key] = row.meta_value if row.meta_value is not None else ""
    return PostResult(
        id=post.id,
        post_author=post.post_author,
        post_date_gmt=ensure_utc(post.post_date_gmt),
        post_title=post.post_title,
        post_name=post.post_name,
        post_status=post.post_status,
        post_type=post.post_type,
        post_parent=post.post_parent,
        menu_order=post.menu_order,
        post_mime_type=post.post_mime_type,
        meta=meta,
    )


class PostRepository:
    """Content store queries. Never writes; every failure becomes PostQueryException."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # ---- flat queries ----

    def _search_condition(self, search: str) -> ColumnElement[bool] | None:
        """Every term must appear in title, excerpt or content; '-term' excludes."""
        conditions = []
        for term in _parse_search_terms(search):
            exclude = term.startswith("-") and len(term) > 1
            if exclude:
                term = term[1:]
            pattern = f"%{_escape_like(term)}%"
            matches = or_(
                Post.post_title.ilike(pattern, escape="\\"),
                Post.post_excerpt.ilike(pattern, escape="\\"),
                Post.post_content.ilike(pattern, escape="\\"),
            )
            conditions.append(not_(matches) if exclude else matches)
        if not conditions:
            return None
        return and_(*conditions)

    def _meta_condition(self, clause: MetaClause) -> ColumnElement[bool] | None:
        """EXISTS over postmeta for one clause; None for an empty clause."""
        if not clause.key and not clause.has_value:
            return None
        inner = [PostMeta.post_id == Post.id]
        if clause.key:
            inner.append(PostMeta.meta_key == str(clause.key))
        if clause.has_value:
            compare = _META_OPERATORS.get(clause.compare or "=")
            if compare is None:
                raise PostQueryException(
                    f'Unsupported meta compare "{clause.compare}"',
                    "invalid_meta_query",
                    {"compare": clause.compare},
                )
            inner.append(compare(PostMeta.meta_value, _meta_value_literal(clause.value)))
        return exists().where(and_(*inner))

    def _where(self, args: PostQueryArgs) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = [
            Post.post_type.in_(args.post_type),
            Post.post_status.in_(args.post_status),
        ]
        if args.post__in:
            conditions.append(Post.id.in_(args.post__in))
        if args.post__not_in:
            conditions.append(Post.id.not_in(args.post__not_in))
        search = self._search_condition(args.search)
        if search is not None:
            conditions.append(search)
        for clause in args.meta_clauses:
            condition = self._meta_condition(clause)
            if condition is not None:
                conditions.append(condition)
        return conditions

    def _relevance(self, search: str) -> Any | None:
        """Rank: whole phrase in title, then all terms in title, then any term in title."""
        terms = [t for t in _parse_search_terms(search) if not t.startswith("-")]
        if not terms:
            return None
        phrase = f"%{_escape_like(search.strip())}%"
        in_title = [Post.post_title.ilike(f"%{_escape_like(t)}%", escape="\\") for t in terms]
        whens: list[tuple[Any, int]] = [(Post.post_title.ilike(phrase, escape="\\"), 1)]
        if len(in_title) > 1:
            whens.append((and_(*in_title), 2))
        whens.append((or_(*in_title), 3))
        return case(*whens, else_=4)

    def _orderby_token(self, token: str, direction: str, args: PostQueryArgs) -> list[Any]:
        if token in _ORDERBY_COLUMNS:
            return [_apply_direction(_ORDERBY_COLUMNS[token], direction)]
        if token not in _ORDERBY_SPECIAL:
            raise PostQueryException(
                f'Unsupported orderby "{token}"',
                "invalid_orderby",
                {"orderby": token},
            )
        if token == "rand":
            return [func.random()]
        if token == "relevance":
            relevance = self._relevance(args.search)
            return [relevance.asc()] if relevance is not None else []
        if token == "post__in":
            if not args.post__in:
                return []
            positions = {pid: pos for pos, pid in enumerate(args.post__in)}
            return [case(positions, value=Post.id, else_=len(positions))]
        if token in ("meta_value", "meta_value_num"):
            if not args.meta_key:
                return []
            value = (
                select(PostMeta.meta_value)
                .where(PostMeta.post_id == Post.id, PostMeta.meta_key == args.meta_key)
                .order_by(PostMeta.meta_id)
                .limit(1)
                .scalar_subquery()
            )
            if token == "meta_value_num":
                value = cast(value, Float)
            return [_apply_direction(value, direction)]
        return []  # none

    def _order_by(self, args: PostQueryArgs) -> list[Any]:
        """Translate orderby/order into ORDER BY clauses.

        orderby is a space separated token string or a {token: order} mapping.
        Without orderby: relevance (when searching) then date descending.
        """
        default_direction = _direction(args.order)
        clauses: list[Any] = []
        if not args.orderby:
            if args.search.strip():
                clauses.extend(self._orderby_token("relevance", "ASC", args))
            clauses.append(_apply_direction(Post.post_date_gmt, default_direction))
        elif isinstance(args.orderby, dict):
            for token, order in args.orderby.items():
                clauses.extend(self._orderby_token(str(token), _direction(order, default_direction), args))
        else:
            tokens = str(args.orderby).replace(",", " ").split()
            if tokens == ["none"]:
                return []
            for token in tokens:
                clauses.extend(self._orderby_token(token, default_direction, args))
        clauses.append(Post.id.desc())
        return clauses

    async def query_posts(self, args: PostQueryArgs) -> PostQueryResult:
        """One page of matches, the total match count and the page count.

        posts_per_page -1 returns every match on one page.
        """
        conditions = self._where(args)
        order_by = self._order_by(args)
        stmt = select(Post).where(*conditions).order_by(*order_by)
        if args.update_post_meta_cache:
            stmt = stmt.options(selectinload(Post.meta))
        unlimited = args.posts_per_page < 0
        if not unlimited:
            offset = min((args.paged - 1) * args.posts_per_page, _MAX_SQL_INT)
            stmt = stmt.offset(offset).limit(args.posts_per_page)

        try:
            result = await self.db.execute(stmt)
            posts = [
                _to_result(p, with_meta=args.update_post_meta_cache)
                for p in result.scalars().all()
            ]
            if unlimited:
                found = len(posts)
                max_num_pages = 1 if posts else 0
            else:
                count = await self.db.execute(
                    select(func.count()).select_from(Post).where(*conditions)
                )
                found = count.scalar_one()
                max_num_pages = math.ceil(found / args.posts_per_page)
        except (SQLAlchemyError, OverflowError) as e:
            logger.exception("Post query failed: %s", e)
            raise PostQueryException("Post query failed", "query_failed") from e
        return PostQueryResult(posts=posts, found_posts=found, max_num_pages=max_num_pages)

    # ---- hierarchical fetch ----

    def _sort_columns(self, sort_column: str, sort_order: str) -> list[Any]:
        direction = _direction(sort_order, "ASC")
        clauses = []
        for name in (c.strip() for c in sort_column.split(",")):
            if not name:
                continue
            if name == "rand":
                clauses.append(func.random())
                continue
            column = _SORT_COLUMNS.get(name) or _SORT_COLUMNS.get(f"post_{name}")
            if column is None:
                raise PostQueryException(
                    f'Unsupported sort_column "{name}"',
                    "invalid_sort_column",
                    {"sort_column": name},
                )
            clauses.append(_apply_direction(column, direction))
        if not clauses:
            clauses.append(_apply_direction(Post.post_title, direction))
        clauses.append(Post.id.asc())
        return clauses

    @staticmethod
    def _prune_excluded(posts: list[PostResult], exclude_tree: Iterable[int]) -> list[PostResult]:
        """Drop excluded ids and all their descendants."""
        children: dict[int, list[int]] = {}
        for post in posts:
            children.setdefault(post.post_parent, []).append(post.id)
        excluded: set[int] = set()
        stack = [pid for pid in exclude_tree if pid]
        while stack:
            pid = stack.pop()
            if pid in excluded:
                continue
            excluded.add(pid)
            stack.extend(children.get(pid, []))
        return [p for p in posts if p.id not in excluded]

    async def get_pages(self, query: PageTreeQuery) -> list[PostResult]:
        """Every object of one type in the given statuses, sorted, minus excluded subtrees."""
        stmt = (
            select(Post)
            .where(Post.post_type == query.post_type, Post.post_status.in_(query.post_status))
            .order_by(*self._sort_columns(query.sort_column, query.sort_order))
        )
        try:
            result = await self.db.execute(stmt)
            posts = [_to_result(p) for p in result.scalars().all()]
        except (SQLAlchemyError, OverflowError) as e:
            logger.exception("Page tree query failed: %s", e)
            raise PostQueryException("Post query failed", "query_failed") from e
        if query.exclude_tree:
            posts = self._prune_excluded(posts, query.exclude_tree)
        return posts

    async def get_posts_by_ids(self, ids: list[int], *, with_meta: bool = False) -> dict[int, PostResult]:
        """Return posts keyed by id (missing ids are absent)."""
        if not ids:
            return {}
        stmt = select(Post).where(Post.id.in_(ids))
        if with_meta:
            stmt = stmt.options(selectinload(Post.meta))
        try:
            result = await self.db.execute(stmt)
        except (SQLAlchemyError, OverflowError) as e:
            logger.exception("Post lookup failed: %s", e)
            raise PostQueryException("Post query failed", "query_failed") from e
        return {p.id: _to_result(p, with_meta=with_meta) for p in result.scalars().all()}
