"""PostgreSQL implementation of Category repository."""

from datetime import datetime, timezone
from typing import Optional

import logfire
from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from quill.domain.error import ConflictError
from quill.domain.model.category import Category
from quill.domain.repository.category import CategoryRepository
from quill.domain.value import CategoryId, PostStatus, Slug
from quill.persistence.mappers import category_to_dict, row_to_category
from quill.persistence.tables import (
    categories_table,
    posts_table,
    posts_to_categories_table,
)


class PostgresCategoryRepository(CategoryRepository):
    """PostgreSQL implementation of CategoryRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find category by ID."""
        stmt = select(categories_table).where(categories_table.c.id == category_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_category(row._asdict()) if row else None

    async def find_by_ids(self, category_ids: list[CategoryId]) -> list[Category]:
        """Find multiple categories by ID in a single query."""
        if not category_ids:
            return []

        stmt = select(categories_table).where(categories_table.c.id.in_(category_ids))
        result = await self.session.execute(stmt)
        return [row_to_category(row._asdict()) for row in result.fetchall()]

    async def find_all(self) -> list[Category]:
        """Find all categories ordered by name."""
        stmt = select(categories_table).order_by(
            categories_table.c.name, categories_table.c.id
        )
        result = await self.session.execute(stmt)
        return [row_to_category(row._asdict()) for row in result.fetchall()]

    async def slug_exists(
        self, slug: Slug, exclude_id: Optional[CategoryId] = None
    ) -> bool:
        """Check if a slug is used by a category other than ``exclude_id``."""
        stmt = (
            select(func.count())
            .select_from(categories_table)
            .where(categories_table.c.slug == str(slug))
        )
        if exclude_id is not None:
            stmt = stmt.where(categories_table.c.id != exclude_id)
        result = await self.session.execute(stmt)
        return (result.scalar() or 0) > 0

    async def name_exists(
        self, name: str, exclude_id: Optional[CategoryId] = None
    ) -> bool:
        """Check if a name is used by a category other than ``exclude_id``."""
        stmt = (
            select(func.count())
            .select_from(categories_table)
            .where(categories_table.c.name == name)
        )
        if exclude_id is not None:
            stmt = stmt.where(categories_table.c.id != exclude_id)
        result = await self.session.execute(stmt)
        return (result.scalar() or 0) > 0

    async def count_posts(self, published_only: bool = False) -> dict[CategoryId, int]:
        """Count posts per category with one GROUP BY query."""
        with logfire.span(
            "category_repository.count_posts", published_only=published_only
        ):
            stmt = select(
                posts_to_categories_table.c.category_id,
                func.count().label("post_count"),
            ).group_by(posts_to_categories_table.c.category_id)

            if published_only:
                stmt = stmt.join(
                    posts_table, posts_to_categories_table.c.post_id == posts_table.c.id
                ).where(posts_table.c.status == PostStatus.PUBLISHED.value)

            result = await self.session.execute(stmt)
            return {
                CategoryId(row.category_id): row.post_count
                for row in result.fetchall()
            }

    async def create(self, category: Category) -> Category:
        """Insert a new category inside a savepoint."""
        with logfire.span("category_repository.create", name=category.name):
            now = datetime.now(timezone.utc)
            values = {**category_to_dict(category), "created_at": now, "updated_at": now}
            stmt = insert(categories_table).values(**values).returning(categories_table)
            row = await self._write(stmt, category)
            logfire.info("Category inserted", category_id=row.id, slug=row.slug)
            return row_to_category(row._asdict())

    async def update(self, category: Category) -> Category:
        """Update a category inside a savepoint."""
        with logfire.span("category_repository.update", category_id=category.id):
            values = category_to_dict(category)
            values.pop("created_at")
            values["updated_at"] = datetime.now(timezone.utc)
            stmt = (
                update(categories_table)
                .where(categories_table.c.id == category.id)
                .values(**values)
                .returning(categories_table)
            )
            row = await self._write(stmt, category)
            return row_to_category(row._asdict())

    async def delete(self, category_id: CategoryId) -> None:
        """Delete a category's association rows, then the category."""
        with logfire.span("category_repository.delete", category_id=category_id):
            await self.session.execute(
                delete(posts_to_categories_table).where(
                    posts_to_categories_table.c.category_id == category_id
                )
            )
            await self.session.execute(
                delete(categories_table).where(categories_table.c.id == category_id)
            )
            await self.session.flush()

    async def _write(self, stmt, category: Category):
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
                return result.fetchone()
        except IntegrityError as e:
            logfire.warn(
                "Category unique violation",
                name=category.name,
                slug=str(category.slug),
            )
            raise ConflictError(
                f"Category name or slug already exists: {category.name}"
            ) from e
