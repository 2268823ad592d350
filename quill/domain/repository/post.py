"""Post repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Optional

from quill.domain.model.category import Category
from quill.domain.model.post import Post
from quill.domain.value import CategoryId, PostId, PostStatus, Slug
from quill.domain.value.common import ValueObject


class PostSortOrder(str, Enum):
    """Sort order for post listings.

    Both orders break ties on id (newest id first) so pagination is stable.
    """

    CREATED = "created"  # Sort by created_at DESC (admin)
    PUBLISHED = "published"  # Sort by published_at DESC (public feed)


class PostFilter(ValueObject):
    """Filter for post listings and counts.

    All set fields are combined with AND.
    """

    status: Optional[PostStatus] = None
    category_id: Optional[CategoryId] = None
    category_slug: Optional[str] = None
    # When set, only posts inside the publication window at this moment match
    visible_at: Optional[datetime] = None


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations, including the
    post-category association set. Implementations live in the
    persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post with its categories if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_slug(self, slug: Slug) -> Optional[Post]:
        """Find a post by slug.

        Args:
            slug: The post's slug

        Returns:
            The post with its categories if found, None otherwise
        """
        pass

    @abstractmethod
    async def slug_exists(self, slug: Slug, exclude_id: Optional[PostId] = None) -> bool:
        """Check whether a slug is taken.

        Args:
            slug: Slug to check
            exclude_id: Post to ignore (the one being updated)

        Returns:
            True if another post already uses the slug
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        post_filter: PostFilter,
        sort: PostSortOrder = PostSortOrder.CREATED,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Post]:
        """Find posts with filtering and pagination.

        Args:
            post_filter: Status, category and visibility filter
            sort: Sort order
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            Posts matching the filter, each with its categories
        """
        pass

    @abstractmethod
    async def count(self, post_filter: PostFilter) -> int:
        """Count posts matching a filter, ignoring pagination.

        Args:
            post_filter: Status, category and visibility filter

        Returns:
            Total number of matching posts
        """
        pass

    @abstractmethod
    async def create(self, post: Post) -> Post:
        """Insert a new post.

        Args:
            post: Post without an ID

        Returns:
            The stored post with its generated ID

        Raises:
            ConflictError: If the slug is already taken
        """
        pass

    @abstractmethod
    async def update(self, post: Post) -> Post:
        """Update an existing post's columns (not its categories).

        Args:
            post: Post with an ID

        Returns:
            The stored post

        Raises:
            ConflictError: If the slug is already taken by another post
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> None:
        """Delete a post and all of its association rows.

        Args:
            post_id: The post ID to delete
        """
        pass

    @abstractmethod
    async def set_categories(
        self, post_id: PostId, category_ids: list[CategoryId]
    ) -> None:
        """Replace the post's category set with exactly ``category_ids``.

        Every existing association row of the post is removed first; an empty
        list leaves the post without categories.

        Args:
            post_id: Post whose associations are replaced
            category_ids: Complete desired set of category IDs
        """
        pass

    @abstractmethod
    async def find_categories(
        self, post_ids: list[PostId]
    ) -> dict[PostId, list[Category]]:
        """Fetch categories for multiple posts in a single query.

        Args:
            post_ids: Post IDs

        Returns:
            Mapping post_id -> categories (posts without categories are absent)
        """
        pass
