"""Attachment resolver: attachment posts → image descriptors (implements IAttachmentResolver).

Attachments are posts of type 'attachment'. Their file path, dimensions and
alt text live in postmeta:

- ``_wp_attached_file``: path relative to the uploads base URL
- ``_wp_attachment_metadata``: JSON with width, height and named sizes
- ``_wp_attachment_image_alt``: alt text
"""

from __future__ import annotations

import json
import logging
import posixpath
from typing import TYPE_CHECKING, Any

from object_selector.shared.utils import decode_title

if TYPE_CHECKING:
    from object_selector.application.dtos.post import PostResult
    from object_selector.application.interfaces.repositories import IPostRepository

logger = logging.getLogger(__name__)

ATTACHMENT_POST_TYPE = "attachment"
ATTACHED_FILE_META_KEY = "_wp_attached_file"
ATTACHMENT_METADATA_META_KEY = "_wp_attachment_metadata"
ATTACHMENT_ALT_META_KEY = "_wp_attachment_image_alt"


def _orientation(width: int | None, height: int | None) -> str:
    if width and height and height > width:
        return "portrait"
    return "landscape"


def _as_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _load_metadata(post: PostResult) -> dict[str, Any]:
    raw = post.meta.get(ATTACHMENT_METADATA_META_KEY)
    if not raw:
        return {}
    try:
        metadata = json.loads(raw)
    except ValueError:
        logger.warning("Attachment %d has unreadable metadata", post.id)
        return {}
    return metadata if isinstance(metadata, dict) else {}


class AttachmentResolver:
    """Builds featured image descriptors from attachment posts and their meta."""

    def __init__(self, post_repo: IPostRepository, uploads_base_url: str) -> None:
        self.post_repo = post_repo
        self.uploads_base_url = uploads_base_url.rstrip("/")

    def _url(self, relative_path: str) -> str:
        return f"{self.uploads_base_url}/{relative_path.lstrip('/')}"

    def describe(self, post: PostResult) -> dict[str, Any]:
        """Return the descriptor for one attachment post (meta must be loaded)."""
        attached_file = post.meta.get(ATTACHED_FILE_META_KEY) or ""
        metadata = _load_metadata(post)
        mime = post.post_mime_type or ""
        mime_type, _, subtype = mime.partition("/")
        width = _as_int(metadata.get("width"))
        height = _as_int(metadata.get("height"))
        url = self._url(attached_file) if attached_file else ""

        descriptor: dict[str, Any] = {
            "id": post.id,
            "title": decode_title(post.post_title),
            "filename": posixpath.basename(attached_file),
            "url": url,
            "alt": post.meta.get(ATTACHMENT_ALT_META_KEY) or "",
            "mime": mime,
            "type": mime_type,
            "subtype": subtype,
            "width": width,
            "height": height,
        }
        if mime_type != "image":
            return descriptor

        sizes: dict[str, dict[str, Any]] = {}
        directory = posixpath.dirname(attached_file)
        for name, size in (metadata.get("sizes") or {}).items():
            if not isinstance(size, dict) or not size.get("file"):
                continue
            size_width = _as_int(size.get("width"))
            size_height = _as_int(size.get("height"))
            sizes[name] = {
                "url": self._url(posixpath.join(directory, size["file"])),
                "width": size_width,
                "height": size_height,
                "orientation": _orientation(size_width, size_height),
            }
        sizes["full"] = {
            "url": url,
            "width": width,
            "height": height,
            "orientation": _orientation(width, height),
        }
        descriptor["sizes"] = sizes
        return descriptor

    async def prepare_attachments(self, attachment_ids: list[int]) -> dict[int, dict[str, Any]]:
        """Descriptors keyed by id; ids that are not attachments are absent."""
        posts = await self.post_repo.get_posts_by_ids(attachment_ids, with_meta=True)
        return {
            post_id: self.describe(post)
            for post_id, post in posts.items()
            if post.post_type == ATTACHMENT_POST_TYPE
        }
