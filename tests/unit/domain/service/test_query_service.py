"""Unit tests for PostQueryService and page requests."""

from datetime import timedelta

import pytest

from quill.domain.error import ValidationError
from quill.domain.service import (
    CategoryService,
    PageRequest,
    PostQueryService,
    PostService,
)
from quill.domain.value import PostStatus, UserId
from quill.persistence.repository.inmemory import InMemoryStore
from tests.harness import backdate_post, create_env_fixture

unit_env = create_env_fixture()


async def publish(service: PostService, title: str, **kwargs):
    kwargs.setdefault("status", PostStatus.PUBLISHED)
    return await service.create_post(
        title=title, content="Body", owner_id=UserId("user-1"), **kwargs
    )


class TestPageRequest:
    """Tests for PageRequest.create."""

    def test_offset(self):
        assert PageRequest.create(3, 10).offset == 20

    def test_limit_above_maximum_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            PageRequest.create(1, 51, max_limit=50)

        detail = exc_info.value.details[0]
        assert detail.field == "limit"
        assert detail.message == "Limit must be 50 or less"

    def test_limit_at_maximum_is_accepted(self):
        assert PageRequest.create(1, 50, max_limit=50).limit == 50

    @pytest.mark.parametrize("page", [0, -1])
    def test_page_must_be_positive(self, page):
        with pytest.raises(ValidationError) as exc_info:
            PageRequest.create(page, 10)

        assert exc_info.value.details[0].message == "Page must be a positive integer"

    def test_limit_must_be_positive(self):
        with pytest.raises(ValidationError) as exc_info:
            PageRequest.create(1, 0)

        assert exc_info.value.details[0].message == "Limit must be a positive integer"

    def test_reports_every_invalid_field(self):
        with pytest.raises(ValidationError) as exc_info:
            PageRequest.create(0, 0)

        assert [d.field for d in exc_info.value.details] == ["page", "limit"]


class TestListPublic:
    """Tests for list_public."""

    @pytest.mark.asyncio
    async def test_paginates(self, unit_env):
        posts = await unit_env.get(PostService)
        query = await unit_env.get(PostQueryService)
        for i in range(25):
            await publish(posts, f"Post {i}")

        first = await query.list_public(PageRequest.create(1, 10))
        last = await query.list_public(PageRequest.create(3, 10))
        beyond = await query.list_public(PageRequest.create(4, 10))

        assert len(first.items) == 10
        assert first.pagination.total == 25
        assert first.pagination.total_pages == 3
        assert len(last.items) == 5
        assert beyond.items == []
        assert beyond.pagination.total == 25
        assert beyond.pagination.page == 4

    @pytest.mark.asyncio
    async def test_empty_listing(self, unit_env):
        query = await unit_env.get(PostQueryService)

        page = await query.list_public(PageRequest.create(1, 10))

        assert page.items == []
        assert page.pagination.total == 0
        assert page.pagination.total_pages == 0

    @pytest.mark.asyncio
    async def test_hides_drafts_and_scheduled_posts(self, unit_env, future):
        posts = await unit_env.get(PostService)
        query = await unit_env.get(PostQueryService)
        await publish(posts, "Visible")
        await publish(posts, "Draft", status=PostStatus.DRAFT)
        await publish(posts, "Scheduled", published_at=future)

        page = await query.list_public(PageRequest.create(1, 10))

        assert [p.title for p in page.items] == ["Visible"]
        assert page.pagination.total == 1

    @pytest.mark.asyncio
    async def test_scheduled_post_appears_once_due(self, unit_env, future):
        posts = await unit_env.get(PostService)
        query = await unit_env.get(PostQueryService)
        await publish(posts, "Scheduled", published_at=future)

        page = await query.list_public(
            PageRequest.create(1, 10), now=future + timedelta(minutes=1)
        )

        assert [p.title for p in page.items] == ["Scheduled"]

    @pytest.mark.asyncio
    async def test_newest_publication_first(self, unit_env):
        posts = await unit_env.get(PostService)
        query = await unit_env.get(PostQueryService)
        store = await unit_env.get(InMemoryStore)
        old = await publish(posts, "Old")
        await publish(posts, "New")
        backdate_post(store, old.id, days=2)
        await publish(posts, "Newest")

        page = await query.list_public(PageRequest.create(1, 10))

        assert [p.title for p in page.items] == ["Newest", "New", "Old"]

    @pytest.mark.asyncio
    async def test_filters_by_category_slug(self, unit_env):
        posts = await unit_env.get(PostService)
        categories = await unit_env.get(CategoryService)
        query = await unit_env.get(PostQueryService)
        tech = await categories.create_category("Tech")
        await publish(posts, "Tagged", category_ids=[tech.id])
        await publish(posts, "Untagged")

        page = await query.list_public(PageRequest.create(1, 10), category_slug="tech")
        unknown = await query.list_public(
            PageRequest.create(1, 10), category_slug="nope"
        )

        assert [p.title for p in page.items] == ["Tagged"]
        assert page.items[0].categories[0].name == "Tech"
        assert unknown.items == []


class TestListAdmin:
    """Tests for list_admin."""

    @pytest.mark.asyncio
    async def test_includes_every_status(self, unit_env, future):
        posts = await unit_env.get(PostService)
        query = await unit_env.get(PostQueryService)
        await publish(posts, "Published")
        await publish(posts, "Draft", status=PostStatus.DRAFT)
        await publish(posts, "Scheduled", published_at=future)

        page = await query.list_admin(PageRequest.create(1, 10))

        assert page.pagination.total == 3
        # Newest created first
        assert [p.title for p in page.items] == ["Scheduled", "Draft", "Published"]

    @pytest.mark.asyncio
    async def test_filters_by_status(self, unit_env):
        posts = await unit_env.get(PostService)
        query = await unit_env.get(PostQueryService)
        await publish(posts, "Published")
        await publish(posts, "Draft", status=PostStatus.DRAFT)

        drafts = await query.list_admin(
            PageRequest.create(1, 10), status=PostStatus.DRAFT
        )

        assert [p.title for p in drafts.items] == ["Draft"]

    @pytest.mark.asyncio
    async def test_filters_by_category_id(self, unit_env):
        posts = await unit_env.get(PostService)
        categories = await unit_env.get(CategoryService)
        query = await unit_env.get(PostQueryService)
        tech = await categories.create_category("Tech")
        life = await categories.create_category("Life")
        await publish(posts, "Both", category_ids=[tech.id, life.id])
        await publish(posts, "Life only", category_ids=[life.id])

        page = await query.list_admin(PageRequest.create(1, 10), category_id=tech.id)

        assert [p.title for p in page.items] == ["Both"]
        assert page.pagination.total == 1
