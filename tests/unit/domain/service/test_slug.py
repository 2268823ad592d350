"""Unit tests for slug derivation and resolution."""

import pytest

from quill.domain.service.slug import (
    resolve_slug,
    slug_base,
    slugify,
)
from quill.domain.value import Slug


def taken(*slugs: str):
    """Build a slug_exists predicate over a fixed set of slugs."""
    existing = set(slugs)

    async def _exists(slug: Slug) -> bool:
        return str(slug) in existing

    return _exists


class TestSlugify:
    """Tests for slugify."""

    def test_lowercases_and_joins_words(self):
        assert slugify("Hello World") == "hello-world"

    def test_collapses_punctuation_and_whitespace(self):
        assert slugify("  --Hello,   World!!  ") == "hello-world"

    def test_keeps_digits(self):
        assert slugify("Top 10 Tips for 2024") == "top-10-tips-for-2024"

    def test_drops_non_latin_characters(self):
        assert slugify("こんにちは") == ""
        assert slugify("Café au lait") == "caf-au-lait"

    def test_truncates_to_100_characters(self):
        result = slugify("a" * 150)
        assert result == "a" * 100

    def test_truncation_never_leaves_trailing_hyphen(self):
        # Word boundary falls exactly on the cut
        result = slugify("a" * 99 + " bcd")
        assert result == "a" * 99
        assert not result.endswith("-")


class TestSlugBase:
    """Tests for slug_base."""

    def test_uses_slugified_text(self):
        assert slug_base("Hello World", "post") == "hello-world"

    def test_falls_back_to_hashed_prefix(self):
        base = slug_base("こんにちは", "post")
        assert base.startswith("post-")
        assert len(base) == len("post-") + 8
        Slug(base)  # Valid slug

    def test_fallback_is_deterministic(self):
        assert slug_base("こんにちは", "post") == slug_base("こんにちは", "post")
        assert slug_base("こんにちは", "post") != slug_base("さようなら", "post")

    def test_fallback_uses_given_prefix(self):
        assert slug_base("!!!", "category").startswith("category-")


class TestResolveSlug:
    """Tests for resolve_slug."""

    @pytest.mark.asyncio
    async def test_free_base_is_used(self):
        slug = await resolve_slug("Hello World", taken(), "post")
        assert str(slug) == "hello-world"

    @pytest.mark.asyncio
    async def test_first_collision_gets_suffix_one(self):
        slug = await resolve_slug("Hello World", taken("hello-world"), "post")
        assert str(slug) == "hello-world-1"

    @pytest.mark.asyncio
    async def test_smallest_free_counter_wins(self):
        exists = taken("hello-world", "hello-world-1", "hello-world-3")
        slug = await resolve_slug("Hello World", exists, "post")
        assert str(slug) == "hello-world-2"

    @pytest.mark.asyncio
    async def test_suffix_keeps_slug_within_limit(self):
        title = "a" * 150
        slug = await resolve_slug(title, taken("a" * 100), "post")
        assert str(slug) == "a" * 98 + "-1"
        assert len(str(slug)) == 100

    @pytest.mark.asyncio
    async def test_fallback_base_collisions_get_suffix(self):
        base = slug_base("こんにちは", "post")
        slug = await resolve_slug("こんにちは", taken(base), "post")
        assert str(slug) == f"{base}-1"
