"""Update post use case."""

from typing import Optional

import logfire

from quill.application.usecase.common import CamelModel, PostItem
from quill.domain.service import PostService
from quill.domain.value import PostId, PostStatus


class UpdatePostRequest(CamelModel):
    """Update post request.

    ``category_ids`` is the complete desired set; omitting it removes every
    category from the post.
    """

    post_id: int
    title: str
    content: str
    status: PostStatus = PostStatus.DRAFT
    excerpt: Optional[str] = None
    category_ids: Optional[list[int]] = None


class UpdatePostResponse(CamelModel):
    """Update post response."""

    success: bool = True
    slug: str
    post: PostItem


class UpdatePostUseCase:
    """Use case for updating a post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize update post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: UpdatePostRequest) -> UpdatePostResponse:
        """Execute update post flow.

        Returns:
            The updated post and its (possibly new) slug

        Raises:
            NotFoundError: If the post doesn't exist
            ValidationError: If a field is invalid or a category doesn't exist
        """
        with logfire.span("update_post.execute", post_id=request.post_id):
            post = await self.post_service.update_post(
                post_id=PostId(request.post_id),
                title=request.title,
                content=request.content,
                status=request.status,
                excerpt=request.excerpt,
                category_ids=request.category_ids,
            )
            return UpdatePostResponse(slug=str(post.slug), post=PostItem.from_domain(post))
