"""Post and PostMeta ORM models: the read-only content store the selector queries."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from object_selector.infrastructure.persistence.database import Base


class Post(Base):
    """Content object of any post type. Table: posts.

    Hierarchy is expressed through post_parent (0 = top level). Attachments
    are posts of type 'attachment'.
    """

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_author: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    post_date_gmt: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    post_modified_gmt: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    post_title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    post_name: Mapped[str] = mapped_column(String(200), nullable=False, default="", index=True)
    post_content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    post_excerpt: Mapped[str] = mapped_column(Text, nullable=False, default="")
    post_status: Mapped[str] = mapped_column(String(20), nullable=False, default="publish")
    post_type: Mapped[str] = mapped_column(String(20), nullable=False, default="post")
    post_parent: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    menu_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    post_mime_type: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    comment_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    meta: Mapped[list["PostMeta"]] = relationship(
        back_populates="post",
        lazy="raise",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("ix_posts_type_status_date", "post_type", "post_status", "post_date_gmt"),
    )


class PostMeta(Base):
    """Key/value metadata attached to a post. Table: postmeta."""

    __tablename__ = "postmeta"

    meta_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    meta_key: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    meta_value: Mapped[str | None] = mapped_column(Text, nullable=True)

    post: Mapped[Post] = relationship(back_populates="meta", lazy="raise")
