"""List posts use case."""

from typing import Literal

import logfire

from quill.application.usecase.common import CamelModel, PaginationItem, PostItem
from quill.config import ContentSettings
from quill.domain.service import PageRequest, PostQueryService
from quill.domain.value import CategoryId, PostStatus


class ListPostsRequest(CamelModel):
    """List posts request.

    ``public=True`` pins the listing to published posts whose publication time
    has passed; ``status`` and ``category_id`` then have no effect.
    """

    page: int = 1
    limit: int | None = None  # Defaults to the configured page size
    public: bool = True
    status: Literal["draft", "published", "all"] = "all"  # Admin only
    category_id: int | None = None  # Admin filter
    category_slug: str | None = None  # Public filter


class ListPostsResponse(CamelModel):
    """List posts response."""

    posts: list[PostItem]
    pagination: PaginationItem


class ListPostsUseCase:
    """Use case for listing posts with filtering and pagination."""

    def __init__(
        self, query_service: PostQueryService, content_settings: ContentSettings
    ) -> None:
        """Initialize list posts use case.

        Args:
            query_service: Post query service
            content_settings: Content settings (largest accepted ``limit``)
        """
        self.query_service = query_service
        self.content_settings = content_settings

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Raises:
            ValidationError: If page or limit is out of range
        """
        with logfire.span(
            "list_posts.execute",
            public=request.public,
            status=request.status,
            page=request.page,
            limit=request.limit,
        ):
            limit = request.limit
            if limit is None:
                limit = self.content_settings.default_page_size
            page_request = PageRequest.create(
                request.page,
                limit,
                self.content_settings.max_page_size,
            )

            if request.public:
                page = await self.query_service.list_public(
                    page_request, category_slug=request.category_slug
                )
            else:
                status = None if request.status == "all" else PostStatus(request.status)
                category_id = (
                    CategoryId(request.category_id)
                    if request.category_id is not None
                    else None
                )
                page = await self.query_service.list_admin(
                    page_request, status=status, category_id=category_id
                )

            return ListPostsResponse(
                posts=[PostItem.from_domain(post) for post in page.items],
                pagination=PaginationItem.from_domain(page.pagination),
            )
