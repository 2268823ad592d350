"""Unit tests for the post use cases."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from quill.application.usecase.category import (
    CreateCategoryRequest,
    CreateCategoryUseCase,
)
from quill.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostUseCase,
    GetPostRequest,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsUseCase,
    UpdatePostRequest,
    UpdatePostUseCase,
)
from quill.domain.error import NotFoundError, ValidationError
from quill.domain.value import PostStatus
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def create_post(env, title="Hello World", **kwargs):
    use_case = await env.get(CreatePostUseCase)
    kwargs.setdefault("content", "Body")
    kwargs.setdefault("owner_id", "user-1")
    return await use_case.execute(CreatePostRequest(title=title, **kwargs))


class TestCreatePostUseCase:
    """Tests for CreatePostUseCase."""

    @pytest.mark.asyncio
    async def test_returns_post_item(self, unit_env):
        categories = await unit_env.get(CreateCategoryUseCase)
        tech = await categories.execute(CreateCategoryRequest(name="Tech"))

        item = await create_post(
            unit_env, status=PostStatus.PUBLISHED, category_ids=[tech.id]
        )

        assert item.slug == "hello-world"
        assert item.owner_id == "user-1"
        assert item.published_at is not None
        assert [c.slug for c in item.categories] == ["tech"]

    @pytest.mark.asyncio
    async def test_serializes_with_camel_case_keys(self, unit_env):
        item = await create_post(unit_env)

        data = item.model_dump(by_alias=True)

        assert {"publishedAt", "ownerId", "createdAt", "updatedAt"} <= data.keys()
        assert "published_at" not in data

    def test_request_accepts_camel_case(self):
        request = CreatePostRequest.model_validate(
            {"title": "T", "content": "C", "ownerId": "u", "categoryIds": [1]}
        )

        assert request.category_ids == [1]
        assert request.owner_id == "u"


class TestGetPostUseCase:
    """Tests for GetPostUseCase."""

    @pytest.mark.asyncio
    async def test_admin_lookup_by_id_sees_drafts(self, unit_env):
        created = await create_post(unit_env, status=PostStatus.DRAFT)
        use_case = await unit_env.get(GetPostUseCase)

        response = await use_case.execute(GetPostRequest(post_id=created.id))

        assert response.post.id == created.id
        assert response.post.status == PostStatus.DRAFT

    @pytest.mark.asyncio
    async def test_public_lookup_by_slug_hides_drafts(self, unit_env):
        await create_post(unit_env, status=PostStatus.DRAFT)
        use_case = await unit_env.get(GetPostUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetPostRequest(slug="hello-world"))

    def test_requires_exactly_one_key(self):
        with pytest.raises(PydanticValidationError):
            GetPostRequest()
        with pytest.raises(PydanticValidationError):
            GetPostRequest(post_id=1, slug="hello")


class TestListPostsUseCase:
    """Tests for ListPostsUseCase."""

    @pytest.mark.asyncio
    async def test_default_limit(self, unit_env):
        for i in range(12):
            await create_post(unit_env, f"Post {i}", status=PostStatus.PUBLISHED)
        use_case = await unit_env.get(ListPostsUseCase)

        response = await use_case.execute(ListPostsRequest())

        assert len(response.posts) == 10
        assert response.pagination.limit == 10
        assert response.pagination.total == 12
        assert response.pagination.total_pages == 2

    @pytest.mark.asyncio
    async def test_limit_above_maximum(self, unit_env):
        use_case = await unit_env.get(ListPostsUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(ListPostsRequest(limit=51))

    @pytest.mark.asyncio
    async def test_zero_limit_is_rejected_not_defaulted(self, unit_env):
        use_case = await unit_env.get(ListPostsUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(ListPostsRequest(limit=0))

    @pytest.mark.asyncio
    async def test_public_ignores_status_filter(self, unit_env):
        await create_post(unit_env, "Draft", status=PostStatus.DRAFT)
        use_case = await unit_env.get(ListPostsUseCase)

        response = await use_case.execute(
            ListPostsRequest(public=True, status="draft")
        )

        assert response.posts == []

    @pytest.mark.asyncio
    async def test_admin_status_filter(self, unit_env):
        await create_post(unit_env, "Draft", status=PostStatus.DRAFT)
        await create_post(unit_env, "Live", status=PostStatus.PUBLISHED)
        use_case = await unit_env.get(ListPostsUseCase)

        drafts = await use_case.execute(ListPostsRequest(public=False, status="draft"))
        everything = await use_case.execute(ListPostsRequest(public=False))

        assert [p.title for p in drafts.posts] == ["Draft"]
        assert everything.pagination.total == 2


class TestUpdateAndDeletePostUseCase:
    """Tests for UpdatePostUseCase and DeletePostUseCase."""

    @pytest.mark.asyncio
    async def test_update_reports_new_slug(self, unit_env):
        await create_post(unit_env, "Taken")
        created = await create_post(unit_env, "Original")
        use_case = await unit_env.get(UpdatePostUseCase)

        response = await use_case.execute(
            UpdatePostRequest(post_id=created.id, title="Taken", content="Body")
        )

        assert response.success is True
        assert response.slug == "taken-1"
        assert response.post.slug == "taken-1"

    @pytest.mark.asyncio
    async def test_delete(self, unit_env):
        created = await create_post(unit_env)
        delete = await unit_env.get(DeletePostUseCase)
        get = await unit_env.get(GetPostUseCase)

        response = await delete.execute(DeletePostRequest(post_id=created.id))

        assert response.success is True
        with pytest.raises(NotFoundError):
            await get.execute(GetPostRequest(post_id=created.id))
