"""In-memory implementation of Category repository for testing."""

from collections import Counter
from datetime import datetime, timezone
from typing import Optional

from quill.domain.error import ConflictError
from quill.domain.model.category import Category
from quill.domain.repository.category import CategoryRepository
from quill.domain.value import CategoryId, PostStatus, Slug

from .store import InMemoryStore


class InMemoryCategoryRepository(CategoryRepository):
    """In-memory implementation of CategoryRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find category by ID."""
        return self._store.categories.get(category_id)

    async def find_by_ids(self, category_ids: list[CategoryId]) -> list[Category]:
        """Find multiple categories by ID."""
        return [
            self._store.categories[cid]
            for cid in category_ids
            if cid in self._store.categories
        ]

    async def find_all(self) -> list[Category]:
        """Find all categories ordered by name."""
        return sorted(self._store.categories.values(), key=lambda c: (c.name, c.id))

    async def slug_exists(
        self, slug: Slug, exclude_id: Optional[CategoryId] = None
    ) -> bool:
        """Check if a slug is used by another category."""
        return any(
            c.slug == slug and c.id != exclude_id
            for c in self._store.categories.values()
        )

    async def name_exists(
        self, name: str, exclude_id: Optional[CategoryId] = None
    ) -> bool:
        """Check if a name is used by another category."""
        return any(
            c.name == name and c.id != exclude_id
            for c in self._store.categories.values()
        )

    async def count_posts(self, published_only: bool = False) -> dict[CategoryId, int]:
        """Count associated posts per category."""
        counts: Counter = Counter()
        for post_id, category_id in self._store.associations:
            post = self._store.posts.get(post_id)
            if published_only and (post is None or post.status != PostStatus.PUBLISHED):
                continue
            counts[category_id] += 1
        return dict(counts)

    async def create(self, category: Category) -> Category:
        """Insert a category, enforcing unique name and slug."""
        await self._check_unique(category, None)
        now = datetime.now(timezone.utc)
        stored = category.model_copy(
            update={
                "id": self._store.next_category_id(),
                "created_at": now,
                "updated_at": now,
            }
        )
        self._store.categories[stored.id] = stored
        return stored

    async def update(self, category: Category) -> Category:
        """Update a category, enforcing unique name and slug."""
        await self._check_unique(category, category.id)
        stored = category.model_copy(update={"updated_at": datetime.now(timezone.utc)})
        self._store.categories[stored.id] = stored
        return stored

    async def delete(self, category_id: CategoryId) -> None:
        """Delete a category and its association rows."""
        self._store.associations[:] = [
            pair for pair in self._store.associations if pair[1] != category_id
        ]
        self._store.categories.pop(category_id, None)

    async def _check_unique(
        self, category: Category, exclude_id: Optional[CategoryId]
    ) -> None:
        if await self.name_exists(category.name, exclude_id) or await self.slug_exists(
            category.slug, exclude_id
        ):
            raise ConflictError(
                f"Category name or slug already exists: {category.name}"
            )
