"""Pytest configuration and fixtures for the object selector.

Environment is set before any object_selector import so Settings validation
passes. Database tests run on an in-memory SQLite database (aiosqlite)
shared across connections through StaticPool; each test gets fresh tables
and the seed content below.
"""

import json
import os
from collections.abc import AsyncIterator
from datetime import UTC, datetime

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-object-selector")
os.environ.setdefault("QUERY_RATE_LIMIT", "1000/minute")
os.environ.setdefault("UPLOADS_BASE_URL", "https://cdn.test/uploads")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from object_selector.core.config import get_settings
from object_selector.infrastructure.persistence.database import Base, get_db
from object_selector.infrastructure.persistence.models import Post, PostMeta
from object_selector.infrastructure.security.jwt import create_access_token
from object_selector.infrastructure.security.nonce import NonceManager
from object_selector.main import create_app

QUERY_ACTION = "customize_object_selector_query"


def _dt(day: int) -> datetime:
    return datetime(2026, 1, day, 12, 0, 0, tzinfo=UTC)


def seed_content() -> list[Post]:
    """Posts, a page hierarchy and one image attachment with fixed ids.

    Pages (publish): About(5) > Team(6) > Alumni(7); Contact(8).
    Secret(9) is a private child of About.
    """
    return [
        Post(id=1, post_title="Hello &amp; Welcome", post_name="hello", post_type="post",
             post_status="publish", post_author=1, post_date_gmt=_dt(10),
             post_content="The first post on the coast."),
        Post(id=2, post_title="Second post", post_name="second", post_type="post",
             post_status="publish", post_author=2, post_date_gmt=_dt(11),
             post_content="More notes.",
             meta=[PostMeta(meta_key="_thumbnail_id", meta_value="10")]),
        Post(id=3, post_title="Draft idea", post_name="draft-idea", post_type="post",
             post_status="draft", post_author=1, post_date_gmt=_dt(12)),
        Post(id=4, post_title="Private thoughts", post_name="private-thoughts", post_type="post",
             post_status="private", post_author=1, post_date_gmt=_dt(13)),
        Post(id=5, post_title="About", post_name="about", post_type="page",
             post_status="publish", post_author=1, post_date_gmt=_dt(1)),
        Post(id=6, post_title="Team", post_name="team", post_type="page",
             post_status="publish", post_author=1, post_date_gmt=_dt(2), post_parent=5),
        Post(id=7, post_title="Alumni", post_name="alumni", post_type="page",
             post_status="publish", post_author=1, post_date_gmt=_dt(3), post_parent=6),
        Post(id=8, post_title="Contact", post_name="contact", post_type="page",
             post_status="publish", post_author=1, post_date_gmt=_dt(4), menu_order=2),
        Post(id=9, post_title="Secret", post_name="secret", post_type="page",
             post_status="private", post_author=1, post_date_gmt=_dt(5), post_parent=5),
        Post(id=10, post_title="Sunset", post_name="sunset", post_type="attachment",
             post_status="inherit", post_author=1, post_date_gmt=_dt(6),
             post_mime_type="image/jpeg",
             meta=[
                 PostMeta(meta_key="_wp_attached_file", meta_value="2026/01/sunset.jpg"),
                 PostMeta(
                     meta_key="_wp_attachment_metadata",
                     meta_value=json.dumps({
                         "width": 1200,
                         "height": 800,
                         "sizes": {
                             "thumbnail": {"file": "sunset-150x150.jpg", "width": 150, "height": 150},
                         },
                     }),
                 ),
                 PostMeta(meta_key="_wp_attachment_image_alt", meta_value="Sunset over water"),
             ]),
        Post(id=11, post_title="Tagged post", post_name="tagged", post_type="post",
             post_status="publish", post_author=3, post_date_gmt=_dt(9),
             post_content="Blue things.",
             meta=[PostMeta(meta_key="color", meta_value="blue")]),
    ]


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """In-memory SQLite engine with the schema created and seed content loaded."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(test_engine, expire_on_commit=False)
    async with session_factory() as session:
        async with session.begin():
            session.add_all(seed_content())
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    """Session for repository tests (read-only use)."""
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(engine: AsyncEngine) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against a fresh app whose get_db uses the test engine."""
    app = create_app()
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    async def _get_test_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_test_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def make_auth_headers(user_id: str = "1", role: str = "administrator") -> dict[str, str]:
    token = create_access_token({"sub": user_id, "role": role})
    return {"Authorization": f"Bearer {token}"}


def make_nonce(user_id: str = "1") -> str:
    settings = get_settings()
    return NonceManager(
        settings.secret_key.get_secret_value(),
        lifetime_seconds=settings.nonce_lifetime_seconds,
    ).create_nonce(QUERY_ACTION, user_id)


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return make_auth_headers("1", "administrator")


@pytest.fixture
def auth_headers_for():
    """Factory: Authorization headers for a user id and role."""
    return make_auth_headers


@pytest.fixture
def nonce_for():
    """Factory: a current query nonce for a user id."""
    return make_nonce
