"""Category domain service."""

from datetime import datetime, timezone
from functools import partial
from typing import Optional

import logfire
from pydantic import ValidationError as PydanticValidationError

from quill.config import ContentSettings
from quill.domain.error import ConflictError, NotFoundError, ValidationError
from quill.domain.model.category import Category, CategoryWithCount
from quill.domain.repository import CategoryRepository
from quill.domain.value import CategoryId, Slug

from .base import Service
from .slug import resolve_slug, slug_base

SLUG_FALLBACK_PREFIX = "category"


class CategoryService(Service):
    """Domain service for category operations."""

    def __init__(
        self,
        category_repository: CategoryRepository,
        content_settings: ContentSettings,
    ) -> None:
        """Initialize category service.

        Args:
            category_repository: Category repository
            content_settings: Content settings (slug retry budget)
        """
        self.category_repository = category_repository
        self.content_settings = content_settings

    async def list_categories(
        self, published_only: bool = False
    ) -> list[CategoryWithCount]:
        """List all categories ordered by name, with post counts.

        Args:
            published_only: Count only published posts (public listing)

        Returns:
            Categories annotated with their post count
        """
        with logfire.span(
            "category_service.list_categories", published_only=published_only
        ):
            categories = await self.category_repository.find_all()
            counts = await self.category_repository.count_posts(
                published_only=published_only
            )

            result = [
                CategoryWithCount(category=c, post_count=counts.get(c.id, 0))
                for c in categories
            ]
            logfire.info("Categories listed", count=len(result))
            return result

    async def get_category(self, category_id: CategoryId) -> CategoryWithCount:
        """Get a category with its unfiltered post count.

        Raises:
            NotFoundError: If the category doesn't exist
        """
        with logfire.span("category_service.get_category", category_id=category_id):
            category = await self._require(category_id)
            counts = await self.category_repository.count_posts(published_only=False)
            return CategoryWithCount(
                category=category, post_count=counts.get(category_id, 0)
            )

    async def create_category(
        self, name: str, description: Optional[str] = None
    ) -> Category:
        """Create a category.

        Args:
            name: Unique display name
            description: Optional description

        Returns:
            Created category with its ID and slug

        Raises:
            ValidationError: If name or description is invalid
            ConflictError: If the name is taken or no free slug could be stored
        """
        with logfire.span("category_service.create_category", name=name):
            now = datetime.now(timezone.utc)
            draft = self._build(
                name=name.strip(),
                description=description or None,
                created_at=now,
                updated_at=now,
            )
            saved = await self._store(draft, None)
            logfire.info(
                "Category created", category_id=saved.id, slug=str(saved.slug)
            )
            return saved

    async def update_category(
        self,
        category_id: CategoryId,
        name: str,
        description: Optional[str] = None,
    ) -> Category:
        """Update a category's name and description.

        The slug is re-resolved only when the name changes.

        Raises:
            NotFoundError: If the category doesn't exist
            ValidationError: If name or description is invalid
            ConflictError: If the name is taken by another category
        """
        with logfire.span(
            "category_service.update_category", category_id=category_id, name=name
        ):
            existing = await self._require(category_id)

            changed = self._build(
                id=existing.id,
                name=name.strip(),
                slug=existing.slug,
                description=description or None,
                created_at=existing.created_at,
                updated_at=datetime.now(timezone.utc),
            )

            if changed.name == existing.name:
                saved = await self.category_repository.update(changed)
            else:
                logfire.info("Name changed, re-resolving slug", category_id=category_id)
                saved = await self._store(changed, category_id)

            logfire.info(
                "Category updated", category_id=category_id, slug=str(saved.slug)
            )
            return saved

    async def delete_category(self, category_id: CategoryId) -> None:
        """Delete a category and its association rows (posts are kept).

        Raises:
            NotFoundError: If the category doesn't exist
        """
        with logfire.span("category_service.delete_category", category_id=category_id):
            existing = await self._require(category_id)
            await self.category_repository.delete(category_id)
            logfire.info(
                "Category deleted", category_id=category_id, name=existing.name
            )

    async def _require(self, category_id: CategoryId) -> Category:
        category = await self.category_repository.find_by_id(category_id)
        if category is None:
            logfire.warn("Category not found", category_id=category_id)
            raise NotFoundError("Category", category_id)
        return category

    @staticmethod
    def _build(**fields) -> Category:
        fields.setdefault(
            "slug", Slug(slug_base(fields["name"], SLUG_FALLBACK_PREFIX))
        )
        try:
            return Category(**fields)
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e)

    async def _store(
        self, category: Category, exclude_id: Optional[CategoryId]
    ) -> Category:
        """Check the name, resolve a slug and write, retrying slug races."""
        attempts = self.content_settings.slug_retry_attempts
        slug_exists = partial(
            self.category_repository.slug_exists, exclude_id=exclude_id
        )

        for attempt in range(1, attempts + 1):
            if await self.category_repository.name_exists(
                category.name, exclude_id=exclude_id
            ):
                logfire.warn("Duplicate category name", name=category.name)
                raise ConflictError(f"Category name already exists: {category.name}")

            slug = await resolve_slug(category.name, slug_exists, SLUG_FALLBACK_PREFIX)
            candidate = category.model_copy(update={"slug": slug})
            try:
                if exclude_id is None:
                    return await self.category_repository.create(candidate)
                return await self.category_repository.update(candidate)
            except ConflictError:
                logfire.warn(
                    "Category slug taken concurrently, retrying",
                    slug=str(slug),
                    attempt=attempt,
                )

        logfire.error("Slug retry budget exhausted", name=category.name)
        raise ConflictError("Could not assign a unique slug, please retry")
