"""Service interfaces (ports) for the application layer.

Protocols define contracts for collaborators the selector consumes: the
caller's capabilities, the type/status registry, attachment resolution and
anti-forgery tokens.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from object_selector.domain.entities import PostStatus, PostType


class ICapabilityChecker(Protocol):
    """Per-caller capability checks (e.g. read, read_private_pages)."""

    def can(self, capability: str) -> bool:
        """Return True if the caller holds the capability."""


class ITypeStatusRegistry(Protocol):
    """Registry of known post types and post statuses."""

    def get_post_type(self, name: str) -> PostType | None:
        """Return the registered post type, or None."""

    def get_post_status(self, name: str) -> PostStatus | None:
        """Return the registered post status, or None."""


class IAttachmentResolver(Protocol):
    """Resolve an attachment id into a structured image descriptor."""

    async def prepare_attachments(self, attachment_ids: list[int]) -> dict[int, dict[str, Any]]:
        """Return id/url/sizes descriptors keyed by id; missing attachments are absent."""


class INonceManager(Protocol):
    """Issue and verify per-action anti-forgery tokens bound to a user."""

    def create_nonce(self, action: str, user_id: str) -> str:
        """Return a nonce valid for the current tick."""

    def verify_nonce(self, nonce: str | None, action: str, user_id: str) -> bool:
        """Return True if nonce was issued for action/user in the current or previous tick."""
