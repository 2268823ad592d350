"""Post domain service."""

from datetime import datetime, timezone
from functools import partial
from typing import Optional

import logfire
from pydantic import ValidationError as PydanticValidationError

from quill.config import ContentSettings
from quill.domain.error import ConflictError, NotFoundError, ValidationError
from quill.domain.model.post import Post
from quill.domain.repository import CategoryRepository, PostRepository
from quill.domain.value import CategoryId, PostId, PostStatus, Slug, UserId

from .base import Service
from .slug import resolve_slug, slug_base

# Model field name -> public field name in error details
FIELD_ALIASES = {
    "category_ids": "categoryIds",
    "published_at": "publishedAt",
    "owner_id": "ownerId",
}

SLUG_FALLBACK_PREFIX = "post"


def _utc(moment: datetime) -> datetime:
    """Treat naive timestamps as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


class PostService(Service):
    """Domain service for post operations.

    Owns slug assignment, the draft/published transition policy, excerpt
    defaults and the replace-all category association.
    """

    def __init__(
        self,
        post_repository: PostRepository,
        category_repository: CategoryRepository,
        content_settings: ContentSettings,
    ) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            category_repository: Category repository (used to validate ids)
            content_settings: Excerpt length and slug retry budget
        """
        self.post_repository = post_repository
        self.category_repository = category_repository
        self.content_settings = content_settings

    async def get_post_by_id(self, post_id: PostId) -> Post:
        """Get a post by ID, any status.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        with logfire.span("post_service.get_post_by_id", post_id=post_id):
            post = await self.post_repository.find_by_id(post_id)
            if post is None:
                logfire.warn("Post not found", post_id=post_id)
                raise NotFoundError("Post", post_id)

            logfire.info("Post found", post_id=post_id, title=post.title)
            return post

    async def get_visible_post_by_slug(
        self, slug: str, now: Optional[datetime] = None
    ) -> Post:
        """Get a publicly visible post by slug.

        Drafts, scheduled posts and malformed slugs are all reported as
        missing.

        Args:
            slug: Slug from the URL
            now: Reference time for the publication window (defaults to now)

        Raises:
            NotFoundError: If no post inside its publication window has the slug
        """
        with logfire.span("post_service.get_visible_post_by_slug", slug=slug):
            try:
                parsed = Slug(slug)
            except PydanticValidationError:
                raise NotFoundError("Post", slug)

            post = await self.post_repository.find_by_slug(parsed)
            moment = now or datetime.now(timezone.utc)
            if post is None or not post.is_visible_at(moment):
                logfire.warn("Post not publicly visible", slug=slug)
                raise NotFoundError("Post", slug)

            logfire.info("Post found by slug", slug=slug, post_id=post.id)
            return post

    async def create_post(
        self,
        title: str,
        content: str,
        owner_id: UserId,
        status: PostStatus = PostStatus.DRAFT,
        excerpt: Optional[str] = None,
        category_ids: Optional[list[int]] = None,
        published_at: Optional[datetime] = None,
    ) -> Post:
        """Create a post and its category associations.

        Args:
            title: Post title
            content: Post body
            owner_id: External user ID of the author
            status: Initial publication state
            excerpt: Summary; defaults to a truncation of the content
            category_ids: Categories to associate (duplicates ignored)
            published_at: Publication time; ignored for drafts, defaults to now

        Returns:
            Created post with its categories

        Raises:
            ValidationError: If a field is invalid or a category doesn't exist
            ConflictError: If no free slug could be stored within the retry budget
        """
        with logfire.span(
            "post_service.create_post", title=title, status=status.value
        ):
            now = datetime.now(timezone.utc)
            if status == PostStatus.PUBLISHED:
                published_at = _utc(published_at) if published_at else now
            else:
                published_at = None

            draft = self._build(
                title=title.strip(),
                content=content,
                excerpt=excerpt,
                status=status,
                published_at=published_at,
                owner_id=owner_id,
                created_at=now,
                updated_at=now,
            )
            ids = await self._validate_category_ids(category_ids)

            saved = await self._store_with_unique_slug(draft, None)
            if ids:
                await self.post_repository.set_categories(saved.id, ids)

            logfire.info(
                "Post created",
                post_id=saved.id,
                slug=str(saved.slug),
                category_count=len(ids),
            )
            return await self.get_post_by_id(saved.id)

    async def update_post(
        self,
        post_id: PostId,
        title: str,
        content: str,
        status: PostStatus,
        excerpt: Optional[str] = None,
        category_ids: Optional[list[int]] = None,
    ) -> Post:
        """Update a post and replace its category set.

        The slug is re-resolved only when the new title no longer produces the
        stored slug's base. Omitting ``category_ids`` leaves the post with no
        categories.

        Raises:
            NotFoundError: If the post doesn't exist
            ValidationError: If a field is invalid or a category doesn't exist
            ConflictError: If no free slug could be stored within the retry budget
        """
        with logfire.span(
            "post_service.update_post", post_id=post_id, status=status.value
        ):
            existing = await self.post_repository.find_by_id(post_id)
            if existing is None:
                logfire.warn("Post not found for update", post_id=post_id)
                raise NotFoundError("Post", post_id)

            now = datetime.now(timezone.utc)
            if status == PostStatus.PUBLISHED:
                published_at = existing.published_at or now
            else:
                published_at = None

            title = title.strip()
            changed = self._build(
                id=existing.id,
                title=title,
                slug=existing.slug,
                content=content,
                excerpt=excerpt,
                status=status,
                published_at=published_at,
                owner_id=existing.owner_id,
                created_at=existing.created_at,
                updated_at=now,
            )
            ids = await self._validate_category_ids(category_ids)

            if slug_base(title, SLUG_FALLBACK_PREFIX) == slug_base(
                existing.title, SLUG_FALLBACK_PREFIX
            ):
                await self.post_repository.update(changed)
            else:
                logfire.info("Title changed, re-resolving slug", post_id=post_id)
                await self._store_with_unique_slug(changed, post_id)

            await self.post_repository.set_categories(post_id, ids)

            updated = await self.get_post_by_id(post_id)
            logfire.info(
                "Post updated",
                post_id=post_id,
                slug=str(updated.slug),
                slug_changed=updated.slug != existing.slug,
            )
            return updated

    async def delete_post(self, post_id: PostId) -> None:
        """Delete a post and its association rows (categories are kept).

        Raises:
            NotFoundError: If the post doesn't exist
        """
        with logfire.span("post_service.delete_post", post_id=post_id):
            existing = await self.post_repository.find_by_id(post_id)
            if existing is None:
                logfire.warn("Post not found for delete", post_id=post_id)
                raise NotFoundError("Post", post_id)

            await self.post_repository.delete(post_id)
            logfire.info("Post deleted", post_id=post_id, slug=str(existing.slug))

    def default_excerpt(self, content: str) -> str:
        """First ``excerpt_length`` characters of content, "..." when truncated."""
        length = self.content_settings.excerpt_length
        if len(content) <= length:
            return content
        return content[:length] + "..."

    def _build(self, **fields) -> Post:
        """Build a validated Post, converting pydantic errors.

        A missing slug is filled with the title's base slug so field
        validation runs before any slug lookup.
        """
        if not fields.get("excerpt"):
            fields["excerpt"] = self.default_excerpt(fields["content"])
        fields.setdefault(
            "slug", Slug(slug_base(fields["title"], SLUG_FALLBACK_PREFIX))
        )
        try:
            return Post(**fields)
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e, FIELD_ALIASES)

    async def _validate_category_ids(
        self, category_ids: Optional[list[int]]
    ) -> list[CategoryId]:
        """De-duplicate category ids and check they all exist.

        Raises:
            ValidationError: If an id is not positive or doesn't exist
        """
        if not category_ids:
            return []

        if any(cid < 1 for cid in category_ids):
            raise ValidationError.for_field(
                "categoryIds", "All category IDs must be positive integers"
            )

        # Preserve request order, drop repeats
        ids = [CategoryId(cid) for cid in dict.fromkeys(category_ids)]
        found = await self.category_repository.find_by_ids(ids)
        missing = set(ids) - {c.id for c in found}
        if missing:
            logfire.warn("Unknown category ids", missing=sorted(missing))
            raise ValidationError.for_field(
                "categoryIds",
                f"Categories not found: {', '.join(str(i) for i in sorted(missing))}",
            )
        return ids

    async def _store_with_unique_slug(
        self, post: Post, exclude_id: Optional[PostId]
    ) -> Post:
        """Resolve a slug and insert or update the post.

        A unique violation means another writer took the slug between the
        check and the write; the slug is re-resolved and the write retried.
        """
        attempts = self.content_settings.slug_retry_attempts
        slug_exists = partial(self.post_repository.slug_exists, exclude_id=exclude_id)

        for attempt in range(1, attempts + 1):
            slug = await resolve_slug(post.title, slug_exists, SLUG_FALLBACK_PREFIX)
            candidate = post.model_copy(update={"slug": slug})
            try:
                if exclude_id is None:
                    return await self.post_repository.create(candidate)
                return await self.post_repository.update(candidate)
            except ConflictError:
                logfire.warn(
                    "Slug taken concurrently, retrying",
                    slug=str(slug),
                    attempt=attempt,
                )

        logfire.error("Slug retry budget exhausted", title=post.title)
        raise ConflictError("Could not assign a unique slug, please retry")
