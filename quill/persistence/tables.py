"""SQLAlchemy table definitions for Quill.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
    text,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# CATEGORIES TABLE
# ============================================================================
categories_table = Table(
    "categories",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False, unique=True),
    Column("slug", String(110), nullable=False, unique=True),
    Column("description", String(500), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(255), nullable=False),
    Column("slug", String(110), nullable=False, unique=True),
    Column("content", Text, nullable=False),
    Column("excerpt", String(500), nullable=True),
    Column(
        "status",
        postgresql.ENUM("draft", "published", name="post_status", create_type=False),
        nullable=False,
        server_default="draft",
    ),
    Column("published_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
    Column("user_id", String(255), nullable=False),  # Owned by the login service
    CheckConstraint(
        "(status = 'published') = (published_at IS NOT NULL)",
        name="published_at_matches_status",
    ),
)

Index("idx_posts_created_at", posts_table.c.created_at.desc())
Index(
    "idx_posts_status_published_at",
    posts_table.c.status,
    posts_table.c.published_at.desc(),
)

# ============================================================================
# POSTS_TO_CATEGORIES TABLE (junction table for many-to-many relationship)
# ============================================================================
posts_to_categories_table = Table(
    "posts_to_categories",
    metadata,
    Column(
        "post_id", Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "category_id",
        Integer,
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
    ),
    PrimaryKeyConstraint("post_id", "category_id", name="pk_posts_to_categories"),
)

Index("idx_posts_to_categories_post_id", posts_to_categories_table.c.post_id)
Index("idx_posts_to_categories_category_id", posts_to_categories_table.c.category_id)
