"""PostgreSQL implementation of Post repository."""

from collections import defaultdict
from datetime import datetime, timezone
from typing import List, Optional

import logfire
from sqlalchemy import Select, delete, desc, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from quill.domain.error import ConflictError
from quill.domain.model import Category, Post
from quill.domain.repository.post import PostFilter, PostRepository, PostSortOrder
from quill.domain.value import CategoryId, PostId, PostStatus, Slug
from quill.persistence.mappers import post_to_dict, row_to_category, row_to_post
from quill.persistence.tables import (
    categories_table,
    posts_table,
    posts_to_categories_table,
)


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_categories(
        self, post_ids: list[PostId]
    ) -> dict[PostId, list[Category]]:
        """Fetch categories for multiple posts in a single query."""
        if not post_ids:
            return {}

        stmt = (
            select(posts_to_categories_table.c.post_id, categories_table)
            .select_from(posts_to_categories_table)
            .join(
                categories_table,
                posts_to_categories_table.c.category_id == categories_table.c.id,
            )
            .where(posts_to_categories_table.c.post_id.in_(post_ids))
            .order_by(categories_table.c.name)
        )
        result = await self.session.execute(stmt)

        # Build lookup: post_id -> [categories]
        post_category_map: dict[PostId, list[Category]] = defaultdict(list)
        for row in result.fetchall():
            post_category_map[row.post_id].append(row_to_category(row._asdict()))

        return post_category_map

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=post_id):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            return await self._fetch_one(stmt)

    async def find_by_slug(self, slug: Slug) -> Optional[Post]:
        """Find a post by slug."""
        with logfire.span("post_repository.find_by_slug", slug=str(slug)):
            stmt = select(posts_table).where(posts_table.c.slug == str(slug))
            return await self._fetch_one(stmt)

    async def slug_exists(self, slug: Slug, exclude_id: Optional[PostId] = None) -> bool:
        """Check if a slug is used by a post other than ``exclude_id``."""
        with logfire.span(
            "post_repository.slug_exists", slug=str(slug), exclude_id=exclude_id
        ):
            stmt = (
                select(func.count())
                .select_from(posts_table)
                .where(posts_table.c.slug == str(slug))
            )
            if exclude_id is not None:
                stmt = stmt.where(posts_table.c.id != exclude_id)

            result = await self.session.execute(stmt)
            exists = (result.scalar() or 0) > 0

            logfire.debug("Slug existence check", slug=str(slug), exists=exists)
            return exists

    async def find_all(
        self,
        post_filter: PostFilter,
        sort: PostSortOrder = PostSortOrder.CREATED,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts with filtering and pagination."""
        with logfire.span(
            "post_repository.find_all",
            sort=sort.value,
            limit=limit,
            offset=offset,
        ):
            stmt = self._apply_filter(select(posts_table), post_filter)

            # Newest first; id breaks ties so pages don't overlap
            if sort == PostSortOrder.PUBLISHED:
                stmt = stmt.order_by(
                    posts_table.c.published_at.desc().nulls_last(),
                    desc(posts_table.c.id),
                )
            else:
                stmt = stmt.order_by(
                    desc(posts_table.c.created_at), desc(posts_table.c.id)
                )

            stmt = stmt.limit(limit).offset(offset)

            result = await self.session.execute(stmt)
            post_rows = result.fetchall()

            if not post_rows:
                logfire.info("No posts found")
                return []

            # Fetch categories for all posts in a single query
            post_category_map = await self.find_categories([row.id for row in post_rows])

            posts = [
                row_to_post(row._asdict(), post_category_map.get(row.id, []))
                for row in post_rows
            ]
            logfire.info("Found posts", count=len(posts))
            return posts

    async def count(self, post_filter: PostFilter) -> int:
        """Count posts matching the filter."""
        with logfire.span("post_repository.count"):
            stmt = self._apply_filter(
                select(func.count()).select_from(posts_table), post_filter
            )
            result = await self.session.execute(stmt)
            count = result.scalar() or 0
            logfire.info("Post count", count=count)
            return count

    async def create(self, post: Post) -> Post:
        """Insert a new post inside a savepoint."""
        with logfire.span("post_repository.create", slug=str(post.slug)):
            now = datetime.now(timezone.utc)
            values = {**post_to_dict(post), "created_at": now, "updated_at": now}

            stmt = insert(posts_table).values(**values).returning(posts_table)
            row = await self._write(stmt, post.slug)

            logfire.info("Post inserted", post_id=row.id, slug=row.slug)
            return row_to_post(row._asdict())

    async def update(self, post: Post) -> Post:
        """Update a post's columns inside a savepoint (categories untouched)."""
        with logfire.span(
            "post_repository.update", post_id=post.id, slug=str(post.slug)
        ):
            values = post_to_dict(post)
            values.pop("created_at")
            values["updated_at"] = datetime.now(timezone.utc)

            stmt = (
                update(posts_table)
                .where(posts_table.c.id == post.id)
                .values(**values)
                .returning(posts_table)
            )
            row = await self._write(stmt, post.slug)

            post_category_map = await self.find_categories([row.id])
            return row_to_post(row._asdict(), post_category_map.get(row.id, []))

    async def delete(self, post_id: PostId) -> None:
        """Delete a post's association rows, then the post (hard delete)."""
        with logfire.span("post_repository.delete", post_id=post_id):
            await self.session.execute(
                delete(posts_to_categories_table).where(
                    posts_to_categories_table.c.post_id == post_id
                )
            )
            await self.session.execute(
                delete(posts_table).where(posts_table.c.id == post_id)
            )
            await self.session.flush()

    async def set_categories(
        self, post_id: PostId, category_ids: list[CategoryId]
    ) -> None:
        """Replace all association rows of a post."""
        with logfire.span(
            "post_repository.set_categories",
            post_id=post_id,
            category_ids=list(category_ids),
        ):
            await self.session.execute(
                delete(posts_to_categories_table).where(
                    posts_to_categories_table.c.post_id == post_id
                )
            )

            if category_ids:
                await self.session.execute(
                    insert(posts_to_categories_table),
                    [
                        {"post_id": post_id, "category_id": category_id}
                        for category_id in dict.fromkeys(category_ids)
                    ],
                )

            await self.session.flush()

    @staticmethod
    def _apply_filter(stmt: Select, post_filter: PostFilter) -> Select:
        """Add WHERE clauses for a PostFilter.

        Category filters use an IN subquery so a post is never counted twice.
        """
        if post_filter.status is not None:
            stmt = stmt.where(posts_table.c.status == post_filter.status.value)

        if post_filter.visible_at is not None:
            stmt = stmt.where(
                posts_table.c.status == PostStatus.PUBLISHED.value,
                posts_table.c.published_at.is_not(None),
                posts_table.c.published_at <= post_filter.visible_at,
            )

        if post_filter.category_id is not None:
            stmt = stmt.where(
                posts_table.c.id.in_(
                    select(posts_to_categories_table.c.post_id).where(
                        posts_to_categories_table.c.category_id
                        == post_filter.category_id
                    )
                )
            )

        if post_filter.category_slug is not None:
            stmt = stmt.where(
                posts_table.c.id.in_(
                    select(posts_to_categories_table.c.post_id)
                    .join(
                        categories_table,
                        posts_to_categories_table.c.category_id
                        == categories_table.c.id,
                    )
                    .where(categories_table.c.slug == post_filter.category_slug)
                )
            )

        return stmt

    async def _fetch_one(self, stmt: Select) -> Optional[Post]:
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if not row:
            return None

        post_category_map = await self.find_categories([row.id])
        return row_to_post(row._asdict(), post_category_map.get(row.id, []))

    async def _write(self, stmt, slug: Slug):
        """Run an INSERT/UPDATE ... RETURNING inside a savepoint.

        A unique violation only rolls back the savepoint, leaving the request
        transaction usable for a retry.
        """
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
                return result.fetchone()
        except IntegrityError as e:
            logfire.warn("Post slug unique violation", slug=str(slug))
            raise ConflictError(f"Post slug already exists: {slug}") from e
