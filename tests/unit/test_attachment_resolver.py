"""AttachmentResolver tests against an in-memory post repository."""

import json

from object_selector.application.dtos.post import PostResult
from object_selector.infrastructure.services import AttachmentResolver


def _attachment(post_id: int, mime: str, meta: dict[str, str], post_type: str = "attachment") -> PostResult:
    return PostResult(
        id=post_id,
        post_author=1,
        post_date_gmt=None,
        post_title="Sunset &amp; Sea",
        post_name=f"attachment-{post_id}",
        post_status="inherit",
        post_type=post_type,
        post_mime_type=mime,
        meta=meta,
    )


class FakePostRepository:
    def __init__(self, posts: list[PostResult]) -> None:
        self.posts = {post.id: post for post in posts}
        self.calls: list[tuple[list[int], bool]] = []

    async def get_posts_by_ids(self, ids, *, with_meta=False):
        self.calls.append((list(ids), with_meta))
        return {i: self.posts[i] for i in ids if i in self.posts}


IMAGE_META = {
    "_wp_attached_file": "2026/01/sunset.jpg",
    "_wp_attachment_image_alt": "Sunset over water",
    "_wp_attachment_metadata": json.dumps(
        {
            "width": 1200,
            "height": 800,
            "sizes": {
                "thumbnail": {"file": "sunset-150x150.jpg", "width": 150, "height": 150},
                "tall": {"file": "sunset-300x600.jpg", "width": 300, "height": 600},
                "broken": {"width": 10},
            },
        }
    ),
}


def test_describe_image() -> None:
    resolver = AttachmentResolver(FakePostRepository([]), "https://cdn.test/uploads/")
    descriptor = resolver.describe(_attachment(10, "image/jpeg", IMAGE_META))
    assert descriptor["id"] == 10
    assert descriptor["title"] == "Sunset & Sea"
    assert descriptor["filename"] == "sunset.jpg"
    assert descriptor["url"] == "https://cdn.test/uploads/2026/01/sunset.jpg"
    assert descriptor["alt"] == "Sunset over water"
    assert (descriptor["type"], descriptor["subtype"]) == ("image", "jpeg")
    assert (descriptor["width"], descriptor["height"]) == (1200, 800)
    sizes = descriptor["sizes"]
    assert set(sizes) == {"thumbnail", "tall", "full"}
    assert sizes["thumbnail"]["url"] == "https://cdn.test/uploads/2026/01/sunset-150x150.jpg"
    assert sizes["tall"]["orientation"] == "portrait"
    assert sizes["full"] == {
        "url": "https://cdn.test/uploads/2026/01/sunset.jpg",
        "width": 1200,
        "height": 800,
        "orientation": "landscape",
    }


def test_describe_non_image_has_no_sizes() -> None:
    resolver = AttachmentResolver(FakePostRepository([]), "https://cdn.test/uploads")
    descriptor = resolver.describe(
        _attachment(12, "application/pdf", {"_wp_attached_file": "2026/01/menu.pdf"})
    )
    assert descriptor["type"] == "application"
    assert descriptor["filename"] == "menu.pdf"
    assert "sizes" not in descriptor


def test_unreadable_metadata_is_ignored() -> None:
    resolver = AttachmentResolver(FakePostRepository([]), "https://cdn.test/uploads")
    descriptor = resolver.describe(
        _attachment(
            13,
            "image/png",
            {"_wp_attached_file": "a.png", "_wp_attachment_metadata": "{not json"},
        )
    )
    assert descriptor["width"] is None
    assert descriptor["sizes"]["full"]["orientation"] == "landscape"


async def test_prepare_attachments_skips_non_attachments() -> None:
    repo = FakePostRepository(
        [
            _attachment(10, "image/jpeg", IMAGE_META),
            _attachment(2, "", {}, post_type="post"),
        ]
    )
    resolver = AttachmentResolver(repo, "https://cdn.test/uploads")
    images = await resolver.prepare_attachments([10, 2, 99])
    assert list(images) == [10]
    assert repo.calls == [([10, 2, 99], True)]
