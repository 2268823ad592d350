"""Integration tests for the PostgreSQL repositories.

Requires a migrated database at ``DATABASE__URL``; enable with
``RUN_INTEGRATION_TESTS=1``. Names carry a random suffix because rows are
committed when each test's request scope closes.
"""

import os
from uuid import uuid4

import pytest

from quill.domain.error import ConflictError
from quill.domain.repository import CategoryRepository, PostFilter, PostRepository
from quill.domain.service import CategoryService, PostService
from quill.domain.value import PostStatus, Slug, UserId
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_INTEGRATION_TESTS") != "1",
    reason="needs PostgreSQL; set RUN_INTEGRATION_TESTS=1",
)

# Integration test fixture - real persistence
integration_env = create_env_fixture(unmock={"persistence"})


def unique(prefix: str) -> str:
    return f"{prefix} {uuid4().hex[:10]}"


class TestPostgresPostRepository:
    """Round trips through PostgresPostRepository."""

    @pytest.mark.asyncio
    async def test_slug_collision_gets_suffix(self, integration_env):
        service = await integration_env.get(PostService)
        title = unique("Integration Post")

        first = await service.create_post(title, "Body", UserId("it-user"))
        second = await service.create_post(title, "Body", UserId("it-user"))

        assert str(second.slug) == f"{first.slug}-1"

    @pytest.mark.asyncio
    async def test_categories_are_joined_on_read(self, integration_env):
        posts = await integration_env.get(PostService)
        categories = await integration_env.get(CategoryService)
        repo = await integration_env.get(PostRepository)
        beta = await categories.create_category(unique("Beta"))
        alpha = await categories.create_category(unique("Alpha"))

        post = await posts.create_post(
            unique("Tagged"),
            "Body",
            UserId("it-user"),
            status=PostStatus.PUBLISHED,
            category_ids=[beta.id, alpha.id],
        )
        loaded = await repo.find_by_slug(post.slug)

        assert loaded is not None
        assert [c.id for c in loaded.categories] == [alpha.id, beta.id]

    @pytest.mark.asyncio
    async def test_category_filter_counts_each_post_once(self, integration_env):
        posts = await integration_env.get(PostService)
        categories = await integration_env.get(CategoryService)
        repo = await integration_env.get(PostRepository)
        tech = await categories.create_category(unique("Tech"))
        await posts.create_post(
            unique("Filtered"),
            "Body",
            UserId("it-user"),
            status=PostStatus.PUBLISHED,
            category_ids=[tech.id],
        )

        post_filter = PostFilter(category_slug=str(tech.slug))

        assert await repo.count(post_filter) == 1
        assert len(await repo.find_all(post_filter)) == 1

    @pytest.mark.asyncio
    async def test_duplicate_slug_write_raises_conflict(self, integration_env):
        service = await integration_env.get(PostService)
        repo = await integration_env.get(PostRepository)
        post = await service.create_post(unique("Original"), "Body", UserId("it-user"))

        duplicate = post.model_copy(update={"id": None, "title": "Copy"})
        with pytest.raises(ConflictError):
            await repo.create(duplicate)

        # The savepoint rolled back; the session is still usable
        assert await repo.slug_exists(Slug(str(post.slug)))


class TestPostgresCategoryRepository:
    """Round trips through PostgresCategoryRepository."""

    @pytest.mark.asyncio
    async def test_count_posts_groups_by_category(self, integration_env):
        posts = await integration_env.get(PostService)
        categories = await integration_env.get(CategoryService)
        repo = await integration_env.get(CategoryRepository)
        tech = await categories.create_category(unique("Counted"))
        for status in [PostStatus.PUBLISHED, PostStatus.DRAFT]:
            await posts.create_post(
                unique("Counted Post"),
                "Body",
                UserId("it-user"),
                status=status,
                category_ids=[tech.id],
            )

        assert (await repo.count_posts(published_only=True))[tech.id] == 1
        assert (await repo.count_posts(published_only=False))[tech.id] == 2

    @pytest.mark.asyncio
    async def test_delete_removes_associations_only(self, integration_env):
        posts = await integration_env.get(PostService)
        categories = await integration_env.get(CategoryService)
        tech = await categories.create_category(unique("Doomed"))
        post = await posts.create_post(
            unique("Survivor"), "Body", UserId("it-user"), category_ids=[tech.id]
        )

        await categories.delete_category(tech.id)

        survivor = await posts.get_post_by_id(post.id)
        assert survivor.categories == []
