"""Public post routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from quill.application.usecase.post import (
    GetPostRequest,
    GetPostResponse,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
)

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


@router.get(
    "",
    response_model=ListPostsResponse,
    summary="List published posts",
)
async def list_posts(
    use_case: FromDishka[ListPostsUseCase],
    page: int = 1,
    limit: int | None = None,
    category: str | None = None,
) -> ListPostsResponse:
    """List published posts whose publication time has passed.

    Args:
        use_case: List posts use case (injected)
        page: Page number, starting at 1
        limit: Page size (at most 50)
        category: Category slug filter

    Example:
        GET /posts?page=2&limit=10&category=tech
    """
    with logfire.span("api.list_posts", page=page, limit=limit, category=category):
        request = ListPostsRequest(
            page=page, limit=limit, public=True, category_slug=category
        )
        return await use_case.execute(request)


@router.get("/{slug}", response_model=GetPostResponse, summary="Get a published post")
async def get_post(slug: str, use_case: FromDishka[GetPostUseCase]) -> GetPostResponse:
    """Get one publicly visible post by slug.

    Drafts and scheduled posts answer 404.
    """
    with logfire.span("api.get_post", slug=slug):
        return await use_case.execute(GetPostRequest(slug=slug))
