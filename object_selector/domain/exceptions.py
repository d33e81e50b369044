"""Domain exceptions for the object selector.

Every rejection the selector can produce is a SelectorException carrying a
machine-readable code, a display message, and structured data naming the
offending field or value. The presentation layer renders them as
``{"success": false, "data": {"code", "message", "data"}}`` with HTTP 400.
"""

from typing import Any


class SelectorException(Exception):
    """Base exception for all selector rejections.

    Attributes:
        message: Human-readable error description (display only, not a contract).
        error_code: Machine-readable error code (e.g. 'bad_post_type').
        details: Structured context identifying the offending field/value, or None.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the error object sent to the client."""
        return {"code": self.error_code, "message": self.message, "data": self.details}


# Request envelope errors


class BadNonceException(SelectorException):
    """Raised when the anti-forgery token is missing or does not verify."""

    def __init__(self) -> None:
        super().__init__("Bad nonce", "bad_nonce")


class MissingPostQueryArgsException(SelectorException):
    """Raised when the post_query_args field is absent from the request."""

    def __init__(self) -> None:
        super().__init__("Missing post_query_args", "missing_post_query_args")


class InvalidPostQueryArgsException(SelectorException):
    """Raised when post_query_args is not a JSON-encoded object."""

    def __init__(self) -> None:
        super().__init__("Invalid post_query_args", "invalid_post_query_args")


# Input shape errors


class DisallowedQueryVarException(SelectorException):
    """Raised when the query description has keys outside the allow-list."""

    def __init__(self, query_vars: list[str]) -> None:
        super().__init__(
            "Disallowed query var",
            "disallowed_query_var",
            {"query_vars": query_vars},
        )


class DisallowedMetaCompareException(SelectorException):
    """Raised when a meta compare operator is not one of = != > >= < <=."""

    def __init__(self, compare: Any) -> None:
        super().__init__(
            "Disallowed meta_compare query var",
            "disallowed_meta_compare_query_var",
            {"query_var": compare},
        )


class DisallowedMetaQueryVarException(SelectorException):
    """Raised when a meta_query clause has keys other than key/value/compare (or is nested)."""

    def __init__(self, query_vars: list[str]) -> None:
        super().__init__(
            "Disallowed meta_query var",
            "disallowed_meta_query_var",
            {"query_vars": query_vars},
        )


class DisallowedMetaQueryRelationException(SelectorException):
    """Raised when meta_query relation is anything other than AND."""

    def __init__(self, relation: Any) -> None:
        super().__init__(
            "Disallowed meta_query relation",
            "disallowed_meta_query_relation_var",
            {"relation": relation},
        )


class BadTreeArgsException(SelectorException):
    """Raised when tree_args is not a mapping."""

    def __init__(self) -> None:
        super().__init__("Expected tree_args as object", "bad_tree_args")


class UnsupportedTreeArgException(SelectorException):
    """Raised when tree_args contains a key other than exclude_tree/sort_column."""

    def __init__(self, arg: str) -> None:
        super().__init__(
            f'Unsupported arg "{arg}" in tree_args',
            "unsupported_tree_arg",
            {"arg": arg},
        )


# Domain errors


class BadPostStatusException(SelectorException):
    """Raised when a requested post status is not registered."""

    def __init__(self, post_status: Any) -> None:
        super().__init__("Bad post status", "bad_post_status", {"post_status": post_status})


class BadPostTypeException(SelectorException):
    """Raised when a requested post type is not registered."""

    def __init__(self, post_type: Any) -> None:
        super().__init__("Bad post type", "bad_post_type", {"post_type": post_type})


# Authorization errors


class CannotQueryPostsException(SelectorException):
    """Raised when the caller lacks the read capability of a post type."""

    def __init__(self, post_type: str) -> None:
        super().__init__("Cannot query posts", "cannot_query_posts", {"post_type": post_type})


class CannotQueryPrivatePostsException(SelectorException):
    """Raised when a non-public status is requested without the read-private capability."""

    def __init__(self, post_type: str) -> None:
        super().__init__(
            "Cannot query private posts",
            "cannot_query_private_posts",
            {"post_type": post_type},
        )


# Tree-mode preconditions


class CannotShowTreeForMultiplePostTypesException(SelectorException):
    """Raised when tree mode is requested for more than one post type."""

    def __init__(self, post_types: list[str]) -> None:
        super().__init__(
            "Cannot show tree for multiple post types",
            "cannot_show_tree_for_multiple_post_types",
            {"post_type": post_types},
        )


class UnrecognizedPostTypeException(SelectorException):
    """Raised when tree mode is requested for a post type that is not registered."""

    def __init__(self, post_type: str) -> None:
        super().__init__(
            "Unrecognized post type",
            "unrecognized_post_type",
            {"post_type": post_type},
        )


class CannotShowTreeForNonHierarchicalPostTypeException(SelectorException):
    """Raised when tree mode is requested for a post type without parent/child support."""

    def __init__(self, post_type: str) -> None:
        super().__init__(
            "Cannot show tree for non-hierarchical post type",
            "cannot_show_tree_for_non_hierarchical_post_type",
            {"post_type": post_type},
        )


# Store errors


class PostQueryException(SelectorException):
    """Raised by the content store when a query cannot be built or executed.

    Covers unsupported orderby / sort_column tokens, malformed meta clause
    values, and database failures. Never turned into an empty result.
    """

    def __init__(self, message: str, error_code: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, error_code, details)
