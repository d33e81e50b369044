"""Domain entities (framework-free dataclasses)."""

from object_selector.domain.entities.content_type import (
    PUBLISH_STATUS,
    PostStatus,
    PostType,
    PostTypeCapabilities,
)

__all__ = [
    "PUBLISH_STATUS",
    "PostStatus",
    "PostType",
    "PostTypeCapabilities",
]
