"""Extension points: preview callbacks and the attachment id filter.

Preview callbacks run in registration order after a query is validated and
before it is executed. They receive a request-scoped PreviewState and the
request's ``customized`` settings, and may only change state through
PreviewState.set_post_override. Attachment id filters may substitute or
suppress (return None) the featured image of a post.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Mapping
from typing import Any

from object_selector.application.dtos.post import PostResult

logger = logging.getLogger(__name__)

# Fields a preview override may replace on a fetched post.
OVERRIDABLE_POST_FIELDS = frozenset({"post_title", "post_status", "post_parent", "menu_order"})

PreviewCallback = Callable[["PreviewState", Mapping[str, Any]], None]
AttachmentIdFilter = Callable[[int | None, PostResult], int | None]


class PreviewState:
    """Unsaved edits to apply to query results for one request."""

    def __init__(self) -> None:
        self._post_overrides: dict[int, dict[str, Any]] = {}

    def set_post_override(self, post_id: int, fields: Mapping[str, Any]) -> None:
        """Record field overrides for a post. Unknown fields raise ValueError."""
        unknown = set(fields) - OVERRIDABLE_POST_FIELDS
        if unknown:
            raise ValueError(f"Cannot override post fields: {sorted(unknown)}")
        self._post_overrides.setdefault(post_id, {}).update(fields)

    def has_overrides(self) -> bool:
        return bool(self._post_overrides)

    def apply(self, post: PostResult) -> PostResult:
        """Return post with any recorded overrides applied."""
        fields = self._post_overrides.get(post.id)
        if not fields:
            return post
        return dataclasses.replace(post, **fields)

    def apply_all(
        self, posts: list[PostResult], allowed_statuses: list[str] | None = None
    ) -> list[PostResult]:
        """Apply overrides; drop posts whose previewed status is outside allowed_statuses."""
        if not self._post_overrides:
            return posts
        previewed = [self.apply(post) for post in posts]
        if allowed_statuses is None:
            return previewed
        return [post for post in previewed if post.post_status in allowed_statuses]


class SelectorHooks:
    """Registry of preview callbacks and attachment id filters (populated at startup)."""

    def __init__(self) -> None:
        self._preview_callbacks: list[PreviewCallback] = []
        self._attachment_id_filters: list[AttachmentIdFilter] = []

    def add_preview_callback(self, callback: PreviewCallback) -> None:
        self._preview_callbacks.append(callback)

    def add_attachment_id_filter(self, fn: AttachmentIdFilter) -> None:
        self._attachment_id_filters.append(fn)

    def run_preview_callbacks(self, customized: Mapping[str, Any]) -> PreviewState:
        """Build a fresh PreviewState by running every callback in order."""
        state = PreviewState()
        for callback in self._preview_callbacks:
            callback(state, customized)
        if state.has_overrides():
            logger.debug("Preview overrides applied to selector query")
        return state

    def filter_attachment_id(self, attachment_id: int | None, post: PostResult) -> int | None:
        """Pass attachment_id through every filter in order."""
        for fn in self._attachment_id_filters:
            attachment_id = fn(attachment_id, post)
        return attachment_id
