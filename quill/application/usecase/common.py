"""Response models shared by post and category use cases.

All models serialize with camelCase keys (``publishedAt``, ``postCount``) and
accept either spelling on input.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from quill.domain.model import Category, CategoryWithCount, Post
from quill.domain.service import Pagination
from quill.domain.value import PostStatus


class CamelModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CategorySummary(CamelModel):
    """Category as embedded in a post."""

    id: int
    name: str
    slug: str

    @classmethod
    def from_domain(cls, category: Category) -> "CategorySummary":
        return cls(id=category.id, name=category.name, slug=str(category.slug))


class CategoryItem(CamelModel):
    """Category with its post count."""

    id: int
    name: str
    slug: str
    description: Optional[str]
    post_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, item: CategoryWithCount) -> "CategoryItem":
        category = item.category
        return cls(
            id=category.id,
            name=category.name,
            slug=str(category.slug),
            description=category.description,
            post_count=item.post_count,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )


class PostItem(CamelModel):
    """Post with its categories."""

    id: int
    title: str
    slug: str
    content: str
    excerpt: Optional[str]
    status: PostStatus
    published_at: Optional[datetime]
    owner_id: str
    created_at: datetime
    updated_at: datetime
    categories: list[CategorySummary]

    @classmethod
    def from_domain(cls, post: Post) -> "PostItem":
        return cls(
            id=post.id,
            title=post.title,
            slug=str(post.slug),
            content=post.content,
            excerpt=post.excerpt,
            status=post.status,
            published_at=post.published_at,
            owner_id=str(post.owner_id),
            created_at=post.created_at,
            updated_at=post.updated_at,
            categories=[CategorySummary.from_domain(c) for c in post.categories],
        )


class PaginationItem(CamelModel):
    """Pagination block."""

    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def from_domain(cls, pagination: Pagination) -> "PaginationItem":
        return cls(**pagination.model_dump())
