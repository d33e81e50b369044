"""In-memory post type and post status registry (implements ITypeStatusRegistry).

Built-in types and statuses mirror the host CMS defaults; custom post types
come from settings.custom_post_types.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from object_selector.core.config import PostTypeConfig
from object_selector.domain.entities import PostStatus, PostType, PostTypeCapabilities

logger = logging.getLogger(__name__)

BUILTIN_POST_TYPES: tuple[PostType, ...] = (
    PostType(
        name="post",
        label="Posts",
        singular_label="Post",
        cap=PostTypeCapabilities.for_capability_type("posts"),
    ),
    PostType(
        name="page",
        label="Pages",
        singular_label="Page",
        hierarchical=True,
        cap=PostTypeCapabilities.for_capability_type("pages"),
    ),
    PostType(
        name="attachment",
        label="Media",
        singular_label="Media",
        cap=PostTypeCapabilities.for_capability_type("posts"),
    ),
)

BUILTIN_POST_STATUSES: tuple[PostStatus, ...] = (
    PostStatus(name="publish", label="Published", public=True),
    PostStatus(name="future", label="Scheduled"),
    PostStatus(name="draft", label="Draft"),
    PostStatus(name="pending", label="Pending"),
    PostStatus(name="private", label="Private"),
    PostStatus(name="trash", label="Trash"),
    PostStatus(name="auto-draft", label="auto-draft"),
    PostStatus(name="inherit", label="inherit"),
)


def post_type_from_config(config: PostTypeConfig) -> PostType:
    return PostType(
        name=config.name,
        label=config.label,
        singular_label=config.singular_label or config.label,
        hierarchical=config.hierarchical,
        cap=PostTypeCapabilities.for_capability_type(config.capability_type),
    )


class ContentRegistry:
    """Registered post types and statuses, read-only after startup."""

    def __init__(
        self,
        post_types: Iterable[PostType] = BUILTIN_POST_TYPES,
        post_statuses: Iterable[PostStatus] = BUILTIN_POST_STATUSES,
    ) -> None:
        self._post_types = {t.name: t for t in post_types}
        self._post_statuses = {s.name: s for s in post_statuses}

    @classmethod
    def from_settings(cls, custom_post_types: Iterable[PostTypeConfig]) -> ContentRegistry:
        """Built-ins plus configured custom types (a custom type may replace a built-in)."""
        registry = cls()
        for config in custom_post_types:
            if config.name in registry._post_types:
                logger.warning("Custom post type '%s' overrides a built-in type", config.name)
            registry._post_types[config.name] = post_type_from_config(config)
        return registry

    def get_post_type(self, name: str) -> PostType | None:
        return self._post_types.get(name)

    def get_post_status(self, name: str) -> PostStatus | None:
        return self._post_statuses.get(name)

    @property
    def post_type_names(self) -> list[str]:
        return list(self._post_types)
