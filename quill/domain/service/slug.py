"""Slug resolution shared by posts and categories.

A slug is derived from a title or name, then made unique within its table by
appending ``-1``, ``-2``, ... until the repository reports the candidate free.
"""

import hashlib
import re
from typing import Awaitable, Callable

import logfire

from quill.domain.value import Slug
from quill.domain.value.types import SLUG_MAX_LENGTH

# Async predicate bound to the repository (and to the id being updated, if any)
SlugExists = Callable[[Slug], Awaitable[bool]]

def slugify(text: str) -> str:
    """Convert text to URL-safe slug format.

    - Converts to lowercase
    - Replaces every run of characters outside [a-z0-9] with a hyphen
    - Strips leading/trailing hyphens
    - Truncates to 100 characters

    Non-Latin characters are dropped, not transliterated, so the result may
    be empty.
    """
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower())
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")[:SLUG_MAX_LENGTH].rstrip("-")


def slug_base(text: str, fallback_prefix: str) -> str:
    """Return the base slug for ``text``, never empty.

    Text with no usable characters (e.g. "こんにちは") gets a deterministic
    ``{fallback_prefix}-{sha1[:8]}`` base so equal titles still collide and
    receive numeric suffixes.
    """
    base = slugify(text)
    if base:
        return base
    digest = hashlib.sha1(text.encode("utf-8")).hexdigest()[:8]
    return f"{fallback_prefix}-{digest}"


def _with_suffix(base: str, counter: int) -> str:
    suffix = f"-{counter}"
    return base[: SLUG_MAX_LENGTH - len(suffix)].rstrip("-") + suffix


async def resolve_slug(
    text: str, slug_exists: SlugExists, fallback_prefix: str
) -> Slug:
    """Resolve a unique slug for ``text``.

    Tries the base first, then ``base-1``, ``base-2``, ... (smallest unused
    counter, checked sequentially).

    Args:
        text: Title or name to derive the slug from
        slug_exists: Predicate reporting whether a candidate is taken
        fallback_prefix: Prefix for the hashed fallback ("post", "category")

    Returns:
        Slug unused at the time of the check
    """
    with logfire.span("slug.resolve_slug", prefix=fallback_prefix):
        base = slug_base(text, fallback_prefix)
        if base != slugify(text):
            logfire.info("Using fallback slug base", base=base)

        candidate = base
        counter = 0
        while await slug_exists(Slug(candidate)):
            counter += 1
            candidate = _with_suffix(base, counter)
            logfire.debug(
                "Slug collision, trying with suffix",
                base_slug=base,
                attempt=candidate,
                counter=counter,
            )

        logfire.info("Resolved slug", slug=candidate, had_collision=counter > 0)
        return Slug(candidate)
