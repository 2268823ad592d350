"""In-memory post repository for testing."""

from collections import defaultdict
from datetime import datetime, timezone
from typing import Optional

from quill.domain.error import ConflictError
from quill.domain.model import Category, Post
from quill.domain.repository.post import PostFilter, PostRepository, PostSortOrder
from quill.domain.value import CategoryId, PostId, Slug

from .store import InMemoryStore

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        post = self._store.posts.get(post_id)
        return self._with_categories(post) if post else None

    async def find_by_slug(self, slug: Slug) -> Optional[Post]:
        """Find a post by slug."""
        for post in self._store.posts.values():
            if post.slug == slug:
                return self._with_categories(post)
        return None

    async def slug_exists(self, slug: Slug, exclude_id: Optional[PostId] = None) -> bool:
        """Check if a slug is used by another post."""
        return any(
            p.slug == slug and p.id != exclude_id for p in self._store.posts.values()
        )

    async def find_all(
        self,
        post_filter: PostFilter,
        sort: PostSortOrder = PostSortOrder.CREATED,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Post]:
        """Find posts with filtering and pagination."""
        posts = self._matching(post_filter)

        if sort == PostSortOrder.PUBLISHED:
            posts.sort(key=lambda p: (p.published_at or _EPOCH, p.id), reverse=True)
        else:
            posts.sort(key=lambda p: (p.created_at, p.id), reverse=True)

        return [self._with_categories(p) for p in posts[offset : offset + limit]]

    async def count(self, post_filter: PostFilter) -> int:
        """Count posts matching the filter."""
        return len(self._matching(post_filter))

    async def create(self, post: Post) -> Post:
        """Insert a post, enforcing slug uniqueness."""
        if await self.slug_exists(post.slug):
            raise ConflictError(f"Post slug already exists: {post.slug}")

        now = datetime.now(timezone.utc)
        stored = post.model_copy(
            update={
                "id": self._store.next_post_id(),
                "categories": [],
                "created_at": now,
                "updated_at": now,
            }
        )
        self._store.posts[stored.id] = stored
        return stored

    async def update(self, post: Post) -> Post:
        """Update a post's columns, enforcing slug uniqueness."""
        if await self.slug_exists(post.slug, exclude_id=post.id):
            raise ConflictError(f"Post slug already exists: {post.slug}")

        stored = post.model_copy(
            update={"categories": [], "updated_at": datetime.now(timezone.utc)}
        )
        self._store.posts[stored.id] = stored
        return self._with_categories(stored)

    async def delete(self, post_id: PostId) -> None:
        """Delete a post and its association rows."""
        self._store.associations[:] = [
            pair for pair in self._store.associations if pair[0] != post_id
        ]
        self._store.posts.pop(post_id, None)

    async def set_categories(
        self, post_id: PostId, category_ids: list[CategoryId]
    ) -> None:
        """Replace all association rows of a post."""
        rows = [pair for pair in self._store.associations if pair[0] != post_id]
        rows.extend((post_id, cid) for cid in dict.fromkeys(category_ids))
        self._store.associations[:] = rows

    async def find_categories(
        self, post_ids: list[PostId]
    ) -> dict[PostId, list[Category]]:
        """Fetch categories for multiple posts."""
        wanted = set(post_ids)
        post_category_map: dict[PostId, list[Category]] = defaultdict(list)
        for post_id, category_id in self._store.associations:
            category = self._store.categories.get(category_id)
            if post_id in wanted and category is not None:
                post_category_map[post_id].append(category)
        for categories in post_category_map.values():
            categories.sort(key=lambda c: c.name)
        return post_category_map

    def _with_categories(self, post: Post) -> Post:
        categories = [
            self._store.categories[cid]
            for pid, cid in self._store.associations
            if pid == post.id and cid in self._store.categories
        ]
        categories.sort(key=lambda c: c.name)
        return post.model_copy(update={"categories": categories})

    def _matching(self, post_filter: PostFilter) -> list[Post]:
        posts = list(self._store.posts.values())

        if post_filter.status is not None:
            posts = [p for p in posts if p.status == post_filter.status]

        if post_filter.visible_at is not None:
            posts = [p for p in posts if p.is_visible_at(post_filter.visible_at)]

        if post_filter.category_id is not None:
            tagged = {
                pid
                for pid, cid in self._store.associations
                if cid == post_filter.category_id
            }
            posts = [p for p in posts if p.id in tagged]

        if post_filter.category_slug is not None:
            category_ids = {
                c.id
                for c in self._store.categories.values()
                if str(c.slug) == post_filter.category_slug
            }
            tagged = {
                pid for pid, cid in self._store.associations if cid in category_ids
            }
            posts = [p for p in posts if p.id in tagged]

        return posts
