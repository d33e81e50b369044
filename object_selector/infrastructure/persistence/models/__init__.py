"""Persistence models: ORM entities."""

from object_selector.infrastructure.persistence.models.post import Post, PostMeta

__all__ = ["Post", "PostMeta"]
