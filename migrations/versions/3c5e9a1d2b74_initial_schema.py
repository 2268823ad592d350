"""initial_schema

Create the content schema for Quill:
- Categories (unique name and slug)
- Posts (draft/published, unique slug)
- Posts to categories (many-to-many junction, cascading from both sides)

Revision ID: 3c5e9a1d2b74
Revises:
Create Date: 2026-10-17 09:12:44.218305

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c5e9a1d2b74"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE post_status AS ENUM ('draft', 'published');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # CATEGORIES table
    # ========================================================================
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("slug", sa.String(110), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="categories_name_key"),
        sa.UniqueConstraint("slug", name="categories_slug_key"),
    )

    # ========================================================================
    # POSTS table
    # ========================================================================
    op.create_table(
        "posts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(110), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("excerpt", sa.String(500), nullable=True),
        sa.Column(
            "status",
            postgresql.ENUM("draft", "published", name="post_status", create_type=False),
            nullable=False,
            server_default="draft",
        ),
        sa.Column("published_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("user_id", sa.String(255), nullable=False),  # External user id
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug", name="posts_slug_key"),
        # Business rule: only published posts carry a publication time
        sa.CheckConstraint(
            "(status = 'published') = (published_at IS NOT NULL)",
            name="published_at_matches_status",
        ),
    )
    op.create_index("idx_posts_created_at", "posts", [sa.text("created_at DESC")])
    op.create_index(
        "idx_posts_status_published_at",
        "posts",
        ["status", sa.text("published_at DESC")],
    )

    # ========================================================================
    # POSTS_TO_CATEGORIES table (junction table for many-to-many)
    # ========================================================================
    op.create_table(
        "posts_to_categories",
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["category_id"], ["categories.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint(
            "post_id", "category_id", name="pk_posts_to_categories"
        ),
    )
    op.create_index(
        "idx_posts_to_categories_post_id", "posts_to_categories", ["post_id"]
    )
    op.create_index(
        "idx_posts_to_categories_category_id", "posts_to_categories", ["category_id"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("posts_to_categories")
    op.drop_table("posts")
    op.drop_table("categories")

    # Drop ENUM types
    op.execute("DROP TYPE IF EXISTS post_status")
