"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict, Optional

from quill.domain.model import Category, Post
from quill.domain.value import CategoryId, PostId, PostStatus, Slug, UserId


def row_to_category(row: Dict[str, Any]) -> Category:
    """Convert database row to Category domain model.

    Args:
        row: Database row as dict

    Returns:
        Category domain model
    """
    return Category(
        id=CategoryId(row["id"]),
        name=row["name"],
        slug=Slug(row["slug"]),
        description=row.get("description"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def category_to_dict(category: Category) -> Dict[str, Any]:
    """Convert Category domain model to database dict (without id)."""
    return {
        "name": category.name,
        "slug": str(category.slug),
        "description": category.description,
        "created_at": category.created_at,
        "updated_at": category.updated_at,
    }


def row_to_post(
    row: Dict[str, Any], categories: Optional[list[Category]] = None
) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict
        categories: Categories associated with the post

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(row["id"]),
        title=row["title"],
        slug=Slug(row["slug"]),
        content=row["content"],
        excerpt=row.get("excerpt"),
        status=PostStatus(row["status"]),
        published_at=row.get("published_at"),
        owner_id=UserId(row["user_id"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        categories=categories or [],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict (without id or categories).

    Args:
        post: Post domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "title": post.title,
        "slug": str(post.slug),
        "content": post.content,
        "excerpt": post.excerpt,
        "status": post.status.value,
        "published_at": post.published_at,
        "user_id": str(post.owner_id),
        "created_at": post.created_at,
        "updated_at": post.updated_at,
    }
