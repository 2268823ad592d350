"""Create post use case."""

from datetime import datetime
from typing import Optional

import logfire

from quill.application.usecase.common import CamelModel, PostItem
from quill.domain.service import PostService
from quill.domain.value import PostStatus, UserId


class CreatePostRequest(CamelModel):
    """Create post request."""

    title: str
    content: str
    owner_id: str  # User ID from the authenticated session
    excerpt: Optional[str] = None
    status: PostStatus = PostStatus.DRAFT
    category_ids: Optional[list[int]] = None
    published_at: Optional[datetime] = None


class CreatePostUseCase:
    """Use case for creating a post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: CreatePostRequest) -> PostItem:
        """Execute create post flow.

        Args:
            request: Create post request

        Returns:
            The created post with its categories

        Raises:
            ValidationError: If a field is invalid or a category doesn't exist
            ConflictError: If no unique slug could be stored
        """
        with logfire.span(
            "create_post.execute", title=request.title, status=request.status.value
        ):
            post = await self.post_service.create_post(
                title=request.title,
                content=request.content,
                owner_id=UserId(request.owner_id),
                status=request.status,
                excerpt=request.excerpt,
                category_ids=request.category_ids,
                published_at=request.published_at,
            )
            return PostItem.from_domain(post)
