"""Result serializer: content objects → selector ResultRecords."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from object_selector.application.dtos.post import PostResult
from object_selector.application.dtos.result import ResultRecord, TreeItem
from object_selector.shared.utils import decode_title, format_gmt

if TYPE_CHECKING:
    from object_selector.application.interfaces.services import (
        IAttachmentResolver,
        ITypeStatusRegistry,
    )
    from object_selector.application.services.hooks import SelectorHooks

THUMBNAIL_META_KEY = "_thumbnail_id"


def _thumbnail_id(post: PostResult) -> int | None:
    raw = post.meta.get(THUMBNAIL_META_KEY)
    try:
        attachment_id = int(raw) if raw is not None else 0
    except (TypeError, ValueError):
        return None
    return attachment_id if attachment_id > 0 else None


class ResultSerializer:
    """Build display records: decoded title, status prefix, optional type suffix and image."""

    def __init__(
        self,
        registry: ITypeStatusRegistry,
        hooks: SelectorHooks,
        attachment_resolver: IAttachmentResolver,
    ) -> None:
        self.registry = registry
        self.hooks = hooks
        self.attachment_resolver = attachment_resolver

    def build_text(self, post: PostResult, *, with_type_label: bool = False) -> str:
        """Return '[<status label>] ' (non-publish only) + title + ' (<type label>)' (optional)."""
        text = ""
        status_obj = self.registry.get_post_status(post.post_status)
        if status_obj is not None and not status_obj.is_publish:
            text += f"[{status_obj.label}] "
        text += decode_title(post.post_title)
        if with_type_label:
            type_obj = self.registry.get_post_type(post.post_type)
            if type_obj is not None:
                text += f" ({type_obj.singular_label})"
        return text

    def _record(
        self,
        post: PostResult,
        *,
        with_type_label: bool = False,
        depth: int | None = None,
        featured_image: dict[str, Any] | None = None,
    ) -> ResultRecord:
        title = decode_title(post.post_title)
        return ResultRecord(
            id=post.id,
            text=self.build_text(post, with_type_label=with_type_label),
            title=title,
            post_title=title,
            post_type=post.post_type,
            post_status=post.post_status,
            post_date_gmt=format_gmt(post.post_date_gmt),
            post_author=post.post_author,
            depth=depth,
            featured_image=featured_image,
        )

    async def serialize_flat(
        self,
        posts: list[PostResult],
        *,
        multiple_post_types: bool,
        include_featured_images: bool,
    ) -> list[ResultRecord]:
        """Serialize one page of a flat query.

        Featured images are resolved in one batch after every post's
        thumbnail id went through the attachment id filters.
        """
        images: dict[int, dict[str, Any]] = {}
        attachment_ids: dict[int, int | None] = {}
        if include_featured_images:
            for post in posts:
                attachment_ids[post.id] = self.hooks.filter_attachment_id(
                    _thumbnail_id(post), post
                )
            wanted = sorted({aid for aid in attachment_ids.values() if aid})
            if wanted:
                images = await self.attachment_resolver.prepare_attachments(wanted)

        records = []
        for post in posts:
            attachment_id = attachment_ids.get(post.id)
            records.append(
                self._record(
                    post,
                    with_type_label=multiple_post_types,
                    featured_image=images.get(attachment_id) if attachment_id else None,
                )
            )
        return records

    def serialize_tree(self, items: list[TreeItem]) -> list[ResultRecord]:
        """Serialize a walked tree; records carry depth and never a featured image."""
        return [self._record(item.post, depth=item.depth) for item in items]
