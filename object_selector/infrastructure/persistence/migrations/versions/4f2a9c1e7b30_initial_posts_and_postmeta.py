"""initial_posts_and_postmeta

Revision ID: 4f2a9c1e7b30
Revises:
Create Date: 2026-10-18 09:12:44.118204

"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4f2a9c1e7b30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "posts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("post_author", sa.Integer(), nullable=False),
        sa.Column("post_date_gmt", sa.DateTime(timezone=True), nullable=True),
        sa.Column("post_modified_gmt", sa.DateTime(timezone=True), nullable=True),
        sa.Column("post_title", sa.Text(), nullable=False),
        sa.Column("post_name", sa.String(length=200), nullable=False),
        sa.Column("post_content", sa.Text(), nullable=False),
        sa.Column("post_excerpt", sa.Text(), nullable=False),
        sa.Column("post_status", sa.String(length=20), nullable=False),
        sa.Column("post_type", sa.String(length=20), nullable=False),
        sa.Column("post_parent", sa.Integer(), nullable=False),
        sa.Column("menu_order", sa.Integer(), nullable=False),
        sa.Column("post_mime_type", sa.String(length=100), nullable=False),
        sa.Column("comment_count", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_posts_post_name"), "posts", ["post_name"], unique=False)
    op.create_index(op.f("ix_posts_post_parent"), "posts", ["post_parent"], unique=False)
    op.create_index(
        "ix_posts_type_status_date",
        "posts",
        ["post_type", "post_status", "post_date_gmt"],
        unique=False,
    )

    op.create_table(
        "postmeta",
        sa.Column("meta_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("meta_key", sa.String(length=255), nullable=True),
        sa.Column("meta_value", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("meta_id"),
    )
    op.create_index(op.f("ix_postmeta_post_id"), "postmeta", ["post_id"], unique=False)
    op.create_index(op.f("ix_postmeta_meta_key"), "postmeta", ["meta_key"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f("ix_postmeta_meta_key"), table_name="postmeta")
    op.drop_index(op.f("ix_postmeta_post_id"), table_name="postmeta")
    op.drop_table("postmeta")
    op.drop_index("ix_posts_type_status_date", table_name="posts")
    op.drop_index(op.f("ix_posts_post_parent"), table_name="posts")
    op.drop_index(op.f("ix_posts_post_name"), table_name="posts")
    op.drop_table("posts")
