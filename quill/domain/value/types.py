"""Domain value objects for Quill.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules.
"""

import re
from enum import Enum

from pydantic import field_validator

from quill.domain.value.common import RootValueObject

SLUG_MAX_LENGTH = 100


class PostStatus(str, Enum):
    """Publication state of a post."""

    DRAFT = "draft"
    PUBLISHED = "published"


class Slug(RootValueObject[str]):
    """URL-safe slug for posts and categories.

    Lowercase alphanumeric words joined by single hyphens, 1-100 characters.
    Examples: 'hello-world', 'hello-world-2', 'post-3f2a9c1b'
    """

    @field_validator("root")
    @classmethod
    def validate_slug_format(cls, v: str) -> str:
        """Validate slug format."""
        if not re.match(r"^[a-z0-9]+(?:-[a-z0-9]+)*$", v):
            raise ValueError(
                "Slug must be lowercase alphanumeric with hyphens, "
                "no leading/trailing hyphens or consecutive hyphens"
            )
        if len(v) > SLUG_MAX_LENGTH:
            raise ValueError(f"Slug must be 1-{SLUG_MAX_LENGTH} characters")
        return v
