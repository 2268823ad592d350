"""Admin post routes.

Every route requires a valid admin session (cookie or bearer token).
"""

from datetime import datetime
from typing import Literal, Optional

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, status
from pydantic import ConfigDict, PositiveInt

from quill.application.usecase.common import CamelModel, PostItem
from quill.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostResponse,
    DeletePostUseCase,
    GetPostRequest,
    GetPostResponse,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
    UpdatePostRequest,
    UpdatePostResponse,
    UpdatePostUseCase,
)
from quill.domain.value import PostStatus, UserId
from quill.interface.api.auth import require_admin

router = APIRouter(
    prefix="/admin/posts",
    tags=["admin"],
    route_class=DishkaRoute,
    dependencies=[Depends(require_admin)],
)


class CreatePostAPIRequest(CamelModel):
    """API request body for creating a post."""

    title: str
    content: str
    excerpt: Optional[str] = None
    status: PostStatus = PostStatus.DRAFT
    category_ids: Optional[list[PositiveInt]] = None
    published_at: Optional[datetime] = None


class UpdatePostAPIRequest(CamelModel):
    """API request body for updating a post.

    The publication time is managed by the status transition, so
    ``publishedAt`` and other unknown fields are rejected.
    """

    model_config = ConfigDict(extra="forbid")

    title: str
    content: str
    excerpt: Optional[str] = None
    status: PostStatus = PostStatus.DRAFT
    category_ids: Optional[list[PositiveInt]] = None


@router.get("", response_model=ListPostsResponse)
async def list_posts(
    use_case: FromDishka[ListPostsUseCase],
    page: int = 1,
    limit: int | None = None,
    status: Literal["draft", "published", "all"] = "all",
    category: int | None = None,
) -> ListPostsResponse:
    """List posts of any status, newest first.

    Args:
        page: Page number, starting at 1
        limit: Page size (at most 50)
        status: draft, published or all
        category: Category ID filter
    """
    with logfire.span(
        "api.admin.list_posts", page=page, limit=limit, status=status, category=category
    ):
        request = ListPostsRequest(
            page=page,
            limit=limit,
            public=False,
            status=status,
            category_id=category,
        )
        return await use_case.execute(request)


@router.get("/{post_id}", response_model=GetPostResponse)
async def get_post(
    post_id: int, use_case: FromDishka[GetPostUseCase]
) -> GetPostResponse:
    """Get one post with its categories, any status."""
    with logfire.span("api.admin.get_post", post_id=post_id):
        return await use_case.execute(GetPostRequest(post_id=post_id))


@router.post("", response_model=PostItem, status_code=status.HTTP_201_CREATED)
async def create_post(
    body: CreatePostAPIRequest,
    use_case: FromDishka[CreatePostUseCase],
    user_id: UserId = Depends(require_admin),
) -> PostItem:
    """Create a post owned by the authenticated user."""
    with logfire.span("api.admin.create_post", title=body.title, user_id=user_id):
        request = CreatePostRequest(
            title=body.title,
            content=body.content,
            owner_id=user_id,
            excerpt=body.excerpt,
            status=body.status,
            category_ids=body.category_ids,
            published_at=body.published_at,
        )
        return await use_case.execute(request)


@router.put("/{post_id}", response_model=UpdatePostResponse)
async def update_post(
    post_id: int,
    body: UpdatePostAPIRequest,
    use_case: FromDishka[UpdatePostUseCase],
) -> UpdatePostResponse:
    """Update a post.

    ``categoryIds`` replaces the whole category set; omit it to clear it.
    """
    with logfire.span("api.admin.update_post", post_id=post_id):
        request = UpdatePostRequest(
            post_id=post_id,
            title=body.title,
            content=body.content,
            status=body.status,
            excerpt=body.excerpt,
            category_ids=body.category_ids,
        )
        return await use_case.execute(request)


@router.delete("/{post_id}", response_model=DeletePostResponse)
async def delete_post(
    post_id: int, use_case: FromDishka[DeletePostUseCase]
) -> DeletePostResponse:
    """Delete a post and its category associations."""
    with logfire.span("api.admin.delete_post", post_id=post_id):
        return await use_case.execute(DeletePostRequest(post_id=post_id))
