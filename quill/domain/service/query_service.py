"""Post listing queries for the public feed and the admin area."""

from datetime import datetime, timezone
from typing import Optional

import logfire

from quill.domain.model.post import Post
from quill.domain.repository import PostFilter, PostRepository, PostSortOrder
from quill.domain.value import CategoryId, PostStatus

from .base import Service
from .pagination import Page, PageRequest


class PostQueryService(Service):
    """Filtered, paginated post listings.

    The public view is pinned to the publication window; no argument can
    widen it.
    """

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize query service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def list_public(
        self,
        page_request: PageRequest,
        category_slug: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Page[Post]:
        """List published posts whose publication time has passed.

        Args:
            page_request: Page number and size
            category_slug: Only posts in this category
            now: Reference time for the publication window (defaults to now)

        Returns:
            Page of posts ordered by publication time, newest first
        """
        post_filter = PostFilter(
            status=PostStatus.PUBLISHED,
            category_slug=category_slug or None,
            visible_at=now or datetime.now(timezone.utc),
        )
        return await self._query(post_filter, PostSortOrder.PUBLISHED, page_request)

    async def list_admin(
        self,
        page_request: PageRequest,
        status: Optional[PostStatus] = None,
        category_id: Optional[CategoryId] = None,
    ) -> Page[Post]:
        """List posts of any status.

        Args:
            page_request: Page number and size
            status: Only posts in this state (None means all)
            category_id: Only posts in this category

        Returns:
            Page of posts ordered by creation time, newest first
        """
        post_filter = PostFilter(status=status, category_id=category_id)
        return await self._query(post_filter, PostSortOrder.CREATED, page_request)

    async def _query(
        self, post_filter: PostFilter, sort: PostSortOrder, page_request: PageRequest
    ) -> Page[Post]:
        with logfire.span(
            "post_query_service.query",
            sort=sort.value,
            status=post_filter.status.value if post_filter.status else "all",
            category_id=post_filter.category_id,
            category_slug=post_filter.category_slug,
            page=page_request.page,
            limit=page_request.limit,
        ):
            total = await self.post_repository.count(post_filter)
            items = []
            # Skip the row query for pages past the end
            if page_request.offset < total:
                items = await self.post_repository.find_all(
                    post_filter,
                    sort=sort,
                    limit=page_request.limit,
                    offset=page_request.offset,
                )

            page = Page.of(items, page_request, total)
            logfire.info(
                "Posts listed",
                count=len(items),
                total=total,
                total_pages=page.pagination.total_pages,
            )
            return page
