"""Tests for domain exceptions (error_code, message, details, client payload)."""

import pytest

from object_selector.domain.exceptions import (
    BadNonceException,
    BadPostStatusException,
    BadPostTypeException,
    BadTreeArgsException,
    CannotQueryPostsException,
    CannotQueryPrivatePostsException,
    CannotShowTreeForMultiplePostTypesException,
    CannotShowTreeForNonHierarchicalPostTypeException,
    DisallowedMetaCompareException,
    DisallowedMetaQueryRelationException,
    DisallowedMetaQueryVarException,
    DisallowedQueryVarException,
    InvalidPostQueryArgsException,
    MissingPostQueryArgsException,
    PostQueryException,
    SelectorException,
    UnrecognizedPostTypeException,
    UnsupportedTreeArgException,
)


def test_selector_exception_default_error_code() -> None:
    """Base SelectorException uses class name as error_code when not provided."""
    exc = SelectorException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "SelectorException"
    assert exc.details is None
    assert str(exc) == "Something failed"


def test_to_dict_shape() -> None:
    exc = BadPostTypeException("product")
    assert exc.to_dict() == {
        "code": "bad_post_type",
        "message": "Bad post type",
        "data": {"post_type": "product"},
    }


@pytest.mark.parametrize(
    ("exc", "code", "data"),
    [
        (BadNonceException(), "bad_nonce", None),
        (MissingPostQueryArgsException(), "missing_post_query_args", None),
        (InvalidPostQueryArgsException(), "invalid_post_query_args", None),
        (DisallowedQueryVarException(["a"]), "disallowed_query_var", {"query_vars": ["a"]}),
        (DisallowedMetaCompareException("LIKE"), "disallowed_meta_compare_query_var", {"query_var": "LIKE"}),
        (DisallowedMetaQueryVarException(["type"]), "disallowed_meta_query_var", {"query_vars": ["type"]}),
        (DisallowedMetaQueryRelationException("OR"), "disallowed_meta_query_relation_var", {"relation": "OR"}),
        (BadTreeArgsException(), "bad_tree_args", None),
        (UnsupportedTreeArgException("depth"), "unsupported_tree_arg", {"arg": "depth"}),
        (BadPostStatusException("x"), "bad_post_status", {"post_status": "x"}),
        (CannotQueryPostsException("page"), "cannot_query_posts", {"post_type": "page"}),
        (CannotQueryPrivatePostsException("page"), "cannot_query_private_posts", {"post_type": "page"}),
        (
            CannotShowTreeForMultiplePostTypesException(["post", "page"]),
            "cannot_show_tree_for_multiple_post_types",
            {"post_type": ["post", "page"]},
        ),
        (UnrecognizedPostTypeException("x"), "unrecognized_post_type", {"post_type": "x"}),
        (
            CannotShowTreeForNonHierarchicalPostTypeException("post"),
            "cannot_show_tree_for_non_hierarchical_post_type",
            {"post_type": "post"},
        ),
        (PostQueryException("Bad", "invalid_orderby", {"orderby": "x"}), "invalid_orderby", {"orderby": "x"}),
    ],
)
def test_error_codes_and_data(exc, code, data) -> None:
    assert isinstance(exc, SelectorException)
    assert exc.error_code == code
    assert exc.details == data
    assert exc.message
