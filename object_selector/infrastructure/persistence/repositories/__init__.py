"""Repositories: read-only data access over the content store."""

from object_selector.infrastructure.persistence.repositories.post_repo import PostRepository

__all__ = ["PostRepository"]
