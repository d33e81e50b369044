"""Seed a small content set (posts, a page tree, an image attachment) for local use.

Usage:
    uv run alembic upgrade head
    uv run python -m scripts.seed_dev_data

Requires: DATABASE_URL (defaults to the local SQLite file), migrated schema.
Existing rows are left alone; run against an empty database.
"""

import asyncio
import json
from datetime import UTC, datetime, timedelta
from pathlib import Path

from dotenv import load_dotenv

from object_selector.infrastructure.persistence import database
from object_selector.infrastructure.persistence.models import Post, PostMeta


def _load_env() -> None:
    load_dotenv(Path(__file__).resolve().parent.parent / ".env", override=True)


def _posts(now: datetime) -> list[Post]:
    image = Post(
        post_title="Harbour at dusk",
        post_name="harbour-at-dusk",
        post_type="attachment",
        post_status="inherit",
        post_mime_type="image/jpeg",
        post_date_gmt=now - timedelta(days=30),
        meta=[
            PostMeta(meta_key="_wp_attached_file", meta_value="2026/09/harbour.jpg"),
            PostMeta(
                meta_key="_wp_attachment_metadata",
                meta_value=json.dumps(
                    {
                        "width": 1600,
                        "height": 900,
                        "sizes": {
                            "thumbnail": {"file": "harbour-150x150.jpg", "width": 150, "height": 150},
                            "medium": {"file": "harbour-300x169.jpg", "width": 300, "height": 169},
                        },
                    }
                ),
            ),
            PostMeta(meta_key="_wp_attachment_image_alt", meta_value="Boats in the harbour"),
        ],
    )
    posts = [
        Post(
            post_title=f"Field notes &#8470;{i}",
            post_name=f"field-notes-{i}",
            post_type="post",
            post_status="publish" if i % 4 else "draft",
            post_date_gmt=now - timedelta(days=i),
            post_content="Notes from the coast.",
        )
        for i in range(1, 13)
    ]
    return [image, *posts]


def _page(
    title: str, parent: int, now: datetime, status: str = "publish", menu_order: int = 0
) -> Post:
    return Post(
        post_title=title,
        post_name=title.lower(),
        post_type="page",
        post_status=status,
        post_date_gmt=now,
        post_parent=parent,
        menu_order=menu_order,
    )


async def main() -> None:
    _load_env()
    database._ensure_engine()
    assert database.AsyncSessionLocal is not None
    now = datetime.now(UTC)

    async with database.AsyncSessionLocal() as session:
        async with session.begin():
            items = _posts(now)
            session.add_all(items)
            await session.flush()
            image = items[0]
            session.add(
                PostMeta(post_id=items[1].id, meta_key="_thumbnail_id", meta_value=str(image.id))
            )

            about = _page("About", 0, now, menu_order=1)
            session.add(about)
            await session.flush()
            session.add_all(
                [
                    _page("Team", about.id, now),
                    _page("History", about.id, now, status="private"),
                    _page("Contact", 0, now, menu_order=2),
                ]
            )

    print(f"Seeded {len(items) + 4} posts")
    await database.dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
