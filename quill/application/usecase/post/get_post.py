"""Get post use case."""

import logfire
from pydantic import model_validator

from quill.application.usecase.common import CamelModel, PostItem
from quill.domain.service import PostService
from quill.domain.value import PostId


class GetPostRequest(CamelModel):
    """Get post request.

    Admin reads use ``post_id`` and see any status. Public reads use ``slug``
    and only see posts inside their publication window.
    """

    post_id: int | None = None
    slug: str | None = None

    @model_validator(mode="after")
    def check_lookup_key(self) -> "GetPostRequest":
        if (self.post_id is None) == (self.slug is None):
            raise ValueError("Provide exactly one of post_id or slug")
        return self


class GetPostResponse(CamelModel):
    """Get post response."""

    post: PostItem


class GetPostUseCase:
    """Use case for retrieving a single post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: GetPostRequest) -> GetPostResponse:
        """Execute get post flow.

        Raises:
            NotFoundError: If the post doesn't exist or isn't publicly visible
        """
        with logfire.span(
            "get_post.execute", post_id=request.post_id, slug=request.slug
        ):
            if request.post_id is not None:
                post = await self.post_service.get_post_by_id(PostId(request.post_id))
            else:
                post = await self.post_service.get_visible_post_by_slug(request.slug)

            return GetPostResponse(post=PostItem.from_domain(post))
