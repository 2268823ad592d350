"""Unit tests for the in-memory repositories."""

from datetime import datetime, timedelta, timezone

import pytest

from quill.domain.error import ConflictError
from quill.domain.model import Category, Post
from quill.domain.repository import PostFilter, PostSortOrder
from quill.domain.value import PostStatus, Slug, UserId
from quill.persistence.repository.inmemory import (
    InMemoryCategoryRepository,
    InMemoryPostRepository,
    InMemoryStore,
)

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_post(slug: str, status=PostStatus.PUBLISHED, published_at=NOW) -> Post:
    return Post(
        title=slug.replace("-", " ").title(),
        slug=Slug(slug),
        content="Body",
        status=status,
        published_at=published_at if status == PostStatus.PUBLISHED else None,
        owner_id=UserId("user-1"),
    )


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def posts(store):
    return InMemoryPostRepository(store)


@pytest.fixture
def categories(store):
    return InMemoryCategoryRepository(store)


class TestInMemoryPostRepository:
    """Tests for InMemoryPostRepository."""

    @pytest.mark.asyncio
    async def test_create_assigns_sequential_ids(self, posts):
        first = await posts.create(make_post("one"))
        second = await posts.create(make_post("two"))

        assert (first.id, second.id) == (1, 2)

    @pytest.mark.asyncio
    async def test_duplicate_slug_conflicts(self, posts):
        await posts.create(make_post("same"))

        with pytest.raises(ConflictError):
            await posts.create(make_post("same"))

    @pytest.mark.asyncio
    async def test_slug_exists_excludes_given_post(self, posts):
        post = await posts.create(make_post("mine"))

        assert await posts.slug_exists(Slug("mine"))
        assert not await posts.slug_exists(Slug("mine"), exclude_id=post.id)

    @pytest.mark.asyncio
    async def test_visibility_filter(self, posts):
        await posts.create(make_post("past", published_at=NOW - timedelta(days=1)))
        await posts.create(make_post("future", published_at=NOW + timedelta(days=1)))
        await posts.create(make_post("draft", status=PostStatus.DRAFT))

        visible = await posts.find_all(
            PostFilter(visible_at=NOW), sort=PostSortOrder.PUBLISHED
        )

        assert [str(p.slug) for p in visible] == ["past"]
        assert await posts.count(PostFilter(visible_at=NOW)) == 1
        assert await posts.count(PostFilter()) == 3

    @pytest.mark.asyncio
    async def test_published_sort_with_offset(self, posts):
        for days in range(5):
            await posts.create(
                make_post(f"post-{days}", published_at=NOW - timedelta(days=days))
            )

        page = await posts.find_all(
            PostFilter(), sort=PostSortOrder.PUBLISHED, limit=2, offset=1
        )

        assert [str(p.slug) for p in page] == ["post-1", "post-2"]

    @pytest.mark.asyncio
    async def test_set_categories_replaces_rows(self, store, posts, categories):
        post = await posts.create(make_post("tagged"))
        a = await categories.create(Category(name="A", slug=Slug("a")))
        b = await categories.create(Category(name="B", slug=Slug("b")))

        await posts.set_categories(post.id, [a.id, a.id])
        await posts.set_categories(post.id, [b.id])

        assert store.associations == [(post.id, b.id)]
        loaded = await posts.find_by_id(post.id)
        assert [c.name for c in loaded.categories] == ["B"]

    @pytest.mark.asyncio
    async def test_stored_post_carries_no_categories(self, store, posts, categories):
        post = await posts.create(make_post("tagged"))
        a = await categories.create(Category(name="A", slug=Slug("a")))
        await posts.set_categories(post.id, [a.id])

        loaded = await posts.find_by_id(post.id)
        await posts.update(loaded.model_copy(update={"title": "Renamed"}))

        assert store.posts[post.id].categories == []
        assert (await posts.find_by_id(post.id)).category_ids == [a.id]


class TestInMemoryCategoryRepository:
    """Tests for InMemoryCategoryRepository."""

    @pytest.mark.asyncio
    async def test_name_and_slug_are_unique(self, categories):
        await categories.create(Category(name="Tech", slug=Slug("tech")))

        with pytest.raises(ConflictError):
            await categories.create(Category(name="Tech", slug=Slug("tech-1")))
        with pytest.raises(ConflictError):
            await categories.create(Category(name="Other", slug=Slug("tech")))

    @pytest.mark.asyncio
    async def test_count_posts(self, posts, categories):
        tech = await categories.create(Category(name="Tech", slug=Slug("tech")))
        live = await posts.create(make_post("live"))
        draft = await posts.create(make_post("draft", status=PostStatus.DRAFT))
        await posts.set_categories(live.id, [tech.id])
        await posts.set_categories(draft.id, [tech.id])

        assert await categories.count_posts(published_only=True) == {tech.id: 1}
        assert await categories.count_posts() == {tech.id: 2}

    @pytest.mark.asyncio
    async def test_delete_removes_associations(self, store, posts, categories):
        tech = await categories.create(Category(name="Tech", slug=Slug("tech")))
        post = await posts.create(make_post("live"))
        await posts.set_categories(post.id, [tech.id])

        await categories.delete(tech.id)

        assert store.associations == []
        assert await posts.find_by_id(post.id) is not None
