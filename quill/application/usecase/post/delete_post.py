"""Delete post use case."""

import logfire

from quill.application.usecase.common import CamelModel
from quill.domain.service import PostService
from quill.domain.value import PostId


class DeletePostRequest(CamelModel):
    """Delete post request."""

    post_id: int


class DeletePostResponse(CamelModel):
    """Delete post response."""

    success: bool = True


class DeletePostUseCase:
    """Use case for deleting a post and its category associations."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: DeletePostRequest) -> DeletePostResponse:
        """Execute delete post flow.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        with logfire.span("delete_post.execute", post_id=request.post_id):
            await self.post_service.delete_post(PostId(request.post_id))
            return DeletePostResponse()
