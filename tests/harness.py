"""Test harness for unit, integration and E2E tests.

Unit and E2E tests run against in-memory repositories. Integration tests
assume a PostgreSQL database is reachable at ``DATABASE__URL`` with the
migrations applied (``alembic upgrade head``).
"""

from datetime import timedelta

import pytest_asyncio

from quill.domain.value import PostId
from quill.persistence.repository.inmemory import InMemoryStore
from quill.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a fresh test container with the specified unmocking
    - Yields a request-scoped container for service access

    Each test gets its own container, so in-memory data never leaks between
    tests.

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - in-memory persistence, no database needed
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_create_post(unit_env):
            service = await unit_env.get(PostService)
            post = await service.create_post(title="Hello", ...)
            assert post.slug.root == "hello"
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


def backdate_post(store: InMemoryStore, post_id: PostId, **delta) -> None:
    """Move a stored post's timestamps into the past.

    Args:
        store: In-memory store holding the post
        post_id: Post to modify
        **delta: ``timedelta`` arguments, e.g. ``hours=2``
    """
    shift = timedelta(**delta)
    post = store.posts[post_id]
    update = {"created_at": post.created_at - shift}
    if post.published_at is not None:
        update["published_at"] = post.published_at - shift
    store.posts[post_id] = post.model_copy(update=update)
