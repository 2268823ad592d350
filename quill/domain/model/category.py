"""Category entity for grouping posts."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, field_validator

from quill.domain.model.common import DomainModel
from quill.domain.value import CategoryId, Slug


class Category(DomainModel):
    """Category entity.

    Posts and categories are linked many-to-many. A category owns nothing:
    deleting it only removes its association rows, never the posts.
    """

    id: Optional[CategoryId] = None  # Assigned by the database on insert
    name: str = Field(min_length=1, max_length=100)
    slug: Slug
    description: Optional[str] = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("name")
    @classmethod
    def validate_name_not_blank(cls, v: str) -> str:
        """Reject names made only of whitespace."""
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v


class CategoryWithCount(DomainModel):
    """Category annotated with the number of associated posts."""

    category: Category
    post_count: int = Field(default=0, ge=0)
