"""Unit tests for the category use cases."""

import pytest

from quill.application.usecase.category import (
    CreateCategoryRequest,
    CreateCategoryUseCase,
    DeleteCategoryRequest,
    DeleteCategoryUseCase,
    GetCategoryRequest,
    GetCategoryUseCase,
    ListCategoriesRequest,
    ListCategoriesUseCase,
    UpdateCategoryRequest,
    UpdateCategoryUseCase,
)
from quill.application.usecase.post import CreatePostRequest, CreatePostUseCase
from quill.domain.error import ConflictError, NotFoundError
from quill.domain.value import PostStatus
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCategoryUseCases:
    """Tests for the category CRUD flow."""

    @pytest.mark.asyncio
    async def test_create_returns_id_and_slug(self, unit_env):
        use_case = await unit_env.get(CreateCategoryUseCase)

        response = await use_case.execute(
            CreateCategoryRequest(name="Deep Learning", description="Neural nets")
        )

        assert response.id >= 1
        assert response.slug == "deep-learning"

    @pytest.mark.asyncio
    async def test_create_duplicate_conflicts(self, unit_env):
        use_case = await unit_env.get(CreateCategoryUseCase)
        await use_case.execute(CreateCategoryRequest(name="Tech"))

        with pytest.raises(ConflictError):
            await use_case.execute(CreateCategoryRequest(name="Tech"))

    @pytest.mark.asyncio
    async def test_update_returns_current_slug(self, unit_env):
        create = await unit_env.get(CreateCategoryUseCase)
        update = await unit_env.get(UpdateCategoryUseCase)
        created = await create.execute(CreateCategoryRequest(name="Tech"))

        response = await update.execute(
            UpdateCategoryRequest(id=created.id, name="Technology")
        )

        assert response.success is True
        assert response.slug == "technology"

    @pytest.mark.asyncio
    async def test_get_and_list_include_post_counts(self, unit_env):
        create = await unit_env.get(CreateCategoryUseCase)
        create_post = await unit_env.get(CreatePostUseCase)
        get = await unit_env.get(GetCategoryUseCase)
        list_categories = await unit_env.get(ListCategoriesUseCase)
        tech = await create.execute(CreateCategoryRequest(name="Tech"))
        await create.execute(CreateCategoryRequest(name="Art"))
        await create_post.execute(
            CreatePostRequest(
                title="Draft",
                content="Body",
                owner_id="user-1",
                status=PostStatus.DRAFT,
                category_ids=[tech.id],
            )
        )

        single = await get.execute(GetCategoryRequest(category_id=tech.id))
        public = await list_categories.execute(ListCategoriesRequest(public=True))
        admin = await list_categories.execute(ListCategoriesRequest(public=False))

        assert single.category.post_count == 1
        assert [(c.name, c.post_count) for c in public.categories] == [
            ("Art", 0),
            ("Tech", 0),
        ]
        assert [(c.name, c.post_count) for c in admin.categories] == [
            ("Art", 0),
            ("Tech", 1),
        ]
        assert "postCount" in public.categories[0].model_dump(by_alias=True)

    @pytest.mark.asyncio
    async def test_delete(self, unit_env):
        create = await unit_env.get(CreateCategoryUseCase)
        delete = await unit_env.get(DeleteCategoryUseCase)
        get = await unit_env.get(GetCategoryUseCase)
        created = await create.execute(CreateCategoryRequest(name="Tech"))

        response = await delete.execute(DeleteCategoryRequest(id=created.id))

        assert response.success is True
        with pytest.raises(NotFoundError):
            await get.execute(GetCategoryRequest(category_id=created.id))
