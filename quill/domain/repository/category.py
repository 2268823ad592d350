"""Category repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from quill.domain.model.category import Category
from quill.domain.value import CategoryId, Slug


class CategoryRepository(ABC):
    """Repository interface for Category aggregate."""

    @abstractmethod
    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find category by ID.

        Args:
            category_id: Category identifier

        Returns:
            Category if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, category_ids: list[CategoryId]) -> list[Category]:
        """Find multiple categories by ID in a single query.

        Args:
            category_ids: Category identifiers

        Returns:
            Found categories (may be fewer than requested if some don't exist)
        """
        pass

    @abstractmethod
    async def find_all(self) -> list[Category]:
        """Find all categories ordered by name.

        Returns:
            List of categories
        """
        pass

    @abstractmethod
    async def slug_exists(
        self, slug: Slug, exclude_id: Optional[CategoryId] = None
    ) -> bool:
        """Check whether a slug is taken by a category other than ``exclude_id``."""
        pass

    @abstractmethod
    async def name_exists(
        self, name: str, exclude_id: Optional[CategoryId] = None
    ) -> bool:
        """Check whether a name is taken by a category other than ``exclude_id``."""
        pass

    @abstractmethod
    async def count_posts(self, published_only: bool = False) -> dict[CategoryId, int]:
        """Count associated posts for every category in one grouped query.

        Args:
            published_only: Only count posts whose status is published

        Returns:
            Mapping category_id -> post count (categories with no posts are absent)
        """
        pass

    @abstractmethod
    async def create(self, category: Category) -> Category:
        """Insert a new category.

        Args:
            category: Category without an ID

        Returns:
            The stored category with its generated ID

        Raises:
            ConflictError: If the name or slug is already taken
        """
        pass

    @abstractmethod
    async def update(self, category: Category) -> Category:
        """Update an existing category.

        Raises:
            ConflictError: If the name or slug is already taken by another category
        """
        pass

    @abstractmethod
    async def delete(self, category_id: CategoryId) -> None:
        """Delete a category and every association row that references it.

        Args:
            category_id: Category identifier
        """
        pass
