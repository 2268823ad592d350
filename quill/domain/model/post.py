"""Post aggregate root.

Posts are the primary content type. A post is either a draft or published;
published posts become publicly visible once their publication time has
passed.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, field_validator, model_validator

from quill.domain.model.category import Category
from quill.domain.model.common import DomainModel
from quill.domain.value import PostId, PostStatus, Slug, UserId


class Post(DomainModel):
    """Post aggregate root.

    Invariants:
    - draft posts have no publication time
    - published posts always have one (possibly in the future: scheduled)
    """

    id: Optional[PostId] = None  # Assigned by the database on insert
    title: str = Field(min_length=1, max_length=255)
    slug: Slug
    content: str = Field(min_length=1)
    excerpt: Optional[str] = Field(default=None, max_length=500)
    status: PostStatus = PostStatus.DRAFT
    published_at: Optional[datetime] = None
    owner_id: UserId
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    categories: list[Category] = Field(default_factory=list)  # Read side only

    @field_validator("title", "content")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject values made only of whitespace."""
        if not v.strip():
            raise ValueError("Value cannot be empty")
        return v

    @model_validator(mode="after")
    def validate_publication_state(self) -> "Post":
        """Keep published_at consistent with status."""
        if self.status == PostStatus.DRAFT and self.published_at is not None:
            raise ValueError("Draft posts cannot have a publication time")
        if self.status == PostStatus.PUBLISHED and self.published_at is None:
            raise ValueError("Published posts require a publication time")
        return self

    def is_visible_at(self, moment: datetime) -> bool:
        """Whether the post is inside its publication window at ``moment``."""
        return (
            self.status == PostStatus.PUBLISHED
            and self.published_at is not None
            and self.published_at <= moment
        )

    @property
    def category_ids(self) -> list[int]:
        """IDs of the associated categories, in association order."""
        return [c.id for c in self.categories if c.id is not None]
