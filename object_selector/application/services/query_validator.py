"""Selector query validator: whitelist-filters an untrusted query description.

Checks run in a fixed order and the first failure wins. Each failure raises
a SelectorException subclass naming the offending key or value; nothing is
silently dropped or coerced into a broader query.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from object_selector.application.dtos.post_query import MetaClause, TreeArgs, ValidatedQuery
from object_selector.domain.enums import MetaCompare
from object_selector.domain.exceptions import (
    BadPostStatusException,
    BadPostTypeException,
    BadTreeArgsException,
    CannotQueryPostsException,
    CannotQueryPrivatePostsException,
    DisallowedMetaCompareException,
    DisallowedMetaQueryRelationException,
    DisallowedMetaQueryVarException,
    DisallowedQueryVarException,
    UnsupportedTreeArgException,
)

if TYPE_CHECKING:
    from object_selector.application.interfaces.services import (
        ICapabilityChecker,
        ITypeStatusRegistry,
    )


# Largest id or page number the store can hold (signed 64-bit).
MAX_INT = 2**63 - 1


def _absint(value: Any) -> int:
    """Return abs(int(value)) capped at MAX_INT, or 0 when value is not an integer-like scalar."""
    if isinstance(value, bool):
        return int(value)
    try:
        number = abs(int(value))
    except (TypeError, ValueError, OverflowError):
        try:
            number = abs(int(float(value)))
        except (TypeError, ValueError, OverflowError):
            return 0
    return min(number, MAX_INT)


def _parse_id_list(value: Any) -> list[int]:
    """Coerce a list, comma/space separated string, or scalar into integer ids."""
    if isinstance(value, str):
        items: list[Any] = [v for v in value.replace(",", " ").split() if v]
    elif isinstance(value, (list, tuple)):
        items = list(value)
    elif isinstance(value, Mapping):
        items = list(value.values())
    else:
        items = [value]
    return [_absint(item) for item in items]


def _as_name_list(value: Any, default: str) -> list[Any]:
    """Normalize a post_type/post_status filter: default when empty, comma split for strings."""
    if not value:
        return [default]
    if isinstance(value, str):
        return [part.strip() for part in value.split(",")]
    if isinstance(value, Mapping):
        return list(value.values())
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


class PostQueryValidator:
    """Validate selector query descriptions against the allow-list, registry and capabilities."""

    ALLOWED_QUERY_VARS: ClassVar[tuple[str, ...]] = (
        "include_featured_images",
        "tree_args",
        "post_status",
        "post_type",
        "s",
        "paged",
        "post__in",
        "post__not_in",
        "meta_key",
        "meta_value",
        "meta_query",
        "meta_compare",
        "orderby",
        "order",
    )
    ALLOWED_META_QUERY_VARS: ClassVar[tuple[str, ...]] = ("key", "value", "compare")
    ALLOWED_TREE_ARGS: ClassVar[tuple[str, ...]] = ("exclude_tree", "sort_column")
    DEFAULTS: ClassVar[dict[str, Any]] = {"s": "", "paged": 1, "tree_args": {}}

    def validate(
        self,
        raw: Mapping[str, Any],
        capabilities: ICapabilityChecker,
        registry: ITypeStatusRegistry,
    ) -> ValidatedQuery:
        """Return the normalized query, or raise the first applicable SelectorException.

        Args:
            raw: Decoded post_query_args object from the client.
            capabilities: Capability checks for the current caller.
            registry: Known post types and statuses.

        Returns:
            ValidatedQuery with defaults applied.

        Raises:
            SelectorException: disallowed_query_var, disallowed_meta_compare_query_var,
                disallowed_meta_query_var, disallowed_meta_query_relation_var,
                bad_post_status, bad_post_type, cannot_query_posts,
                cannot_query_private_posts, bad_tree_args, unsupported_tree_arg.
        """
        args: dict[str, Any] = {**self.DEFAULTS, **raw}

        # Inclusion lists are assumed small and complete: fetch them all.
        posts_per_page = -1 if args.get("post__in") else None

        extra_query_vars = [key for key in raw if key not in self.ALLOWED_QUERY_VARS]
        if extra_query_vars:
            raise DisallowedQueryVarException([str(key) for key in extra_query_vars])

        meta_compare = args.get("meta_compare")
        if meta_compare and not self._is_allowed_compare(meta_compare):
            raise DisallowedMetaCompareException(meta_compare)

        meta_query = self._validate_meta_query(args.get("meta_query"))

        post_status, has_private_status = self._validate_post_status(
            args.get("post_status"), registry
        )
        post_type = self._validate_post_type(
            args.get("post_type"), has_private_status, capabilities, registry
        )

        tree_args = self._validate_tree_args(args["tree_args"])

        search = args["s"]
        if not isinstance(search, str):
            search = "" if search is None else str(search)

        return ValidatedQuery(
            search=search,
            paged=max(1, _absint(args["paged"])),
            posts_per_page=posts_per_page,
            post_type=post_type,
            post_status=post_status,
            post__in=_parse_id_list(args["post__in"]) if args.get("post__in") else None,
            post__not_in=(
                _parse_id_list(args["post__not_in"]) if args.get("post__not_in") else None
            ),
            meta_key=args.get("meta_key") or None,
            meta_value=args.get("meta_value"),
            meta_compare=meta_compare or None,
            meta_query=meta_query,
            orderby=args.get("orderby") or None,
            order=args.get("order") or None,
            include_featured_images=bool(args.get("include_featured_images")),
            has_private_status=has_private_status,
            tree_args=tree_args,
        )

    @staticmethod
    def _is_allowed_compare(compare: Any) -> bool:
        return isinstance(compare, str) and compare in MetaCompare.values()

    def _validate_meta_query(self, meta_query: Any) -> list[MetaClause]:
        """Validate a flat AND list of clauses. Nested groups are not supported and reject."""
        if not meta_query:
            return []
        if isinstance(meta_query, Mapping):
            items = list(meta_query.items())
        elif isinstance(meta_query, list):
            items = list(enumerate(meta_query))
        else:
            raise DisallowedMetaQueryVarException(["meta_query"])

        clauses: list[MetaClause] = []
        for key, clause in items:
            if key == "relation":
                if clause != "AND":
                    raise DisallowedMetaQueryRelationException(clause)
                continue
            if not isinstance(clause, Mapping):
                raise DisallowedMetaQueryVarException([str(key)])
            extra_meta_query_vars = [
                k for k in clause if k not in self.ALLOWED_META_QUERY_VARS
            ]
            if extra_meta_query_vars:
                raise DisallowedMetaQueryVarException([str(k) for k in extra_meta_query_vars])
            compare = clause.get("compare")
            if compare and not self._is_allowed_compare(compare):
                raise DisallowedMetaCompareException(compare)
            clauses.append(
                MetaClause(
                    key=clause.get("key") or None,
                    value=clause.get("value"),
                    compare=compare or "=",
                    has_value="value" in clause,
                )
            )
        return clauses

    @staticmethod
    def _validate_post_status(
        value: Any, registry: ITypeStatusRegistry
    ) -> tuple[list[str], bool]:
        """Return (statuses, has_private_status)."""
        statuses = _as_name_list(value, "publish")
        has_private_status = False
        for post_status in statuses:
            status_obj = (
                registry.get_post_status(post_status) if isinstance(post_status, str) else None
            )
            if status_obj is None:
                raise BadPostStatusException(post_status)
            if not status_obj.public:
                has_private_status = True
        return statuses, has_private_status

    @staticmethod
    def _validate_post_type(
        value: Any,
        has_private_status: bool,
        capabilities: ICapabilityChecker,
        registry: ITypeStatusRegistry,
    ) -> list[str]:
        post_types = _as_name_list(value, "post")
        for post_type in post_types:
            type_obj = registry.get_post_type(post_type) if isinstance(post_type, str) else None
            if type_obj is None:
                raise BadPostTypeException(post_type)
            if not capabilities.can(type_obj.cap.read):
                raise CannotQueryPostsException(post_type)
            if has_private_status and not capabilities.can(type_obj.cap.read_private_posts):
                raise CannotQueryPrivatePostsException(post_type)
        return post_types

    def _validate_tree_args(self, value: Any) -> TreeArgs:
        # An empty JSON array is how an empty associative array is often encoded.
        if isinstance(value, list) and not value:
            value = {}
        if not isinstance(value, Mapping):
            raise BadTreeArgsException()
        for key in value:
            if key not in self.ALLOWED_TREE_ARGS:
                raise UnsupportedTreeArgException(str(key))

        exclude_tree = None
        if "exclude_tree" in value:
            exclude_tree = _parse_id_list(value["exclude_tree"]) if value["exclude_tree"] else []
        sort_column = None
        if "sort_column" in value:
            raw_sort = value["sort_column"]
            sort_column = raw_sort if isinstance(raw_sort, str) else ""
        return TreeArgs(exclude_tree=exclude_tree, sort_column=sort_column)
