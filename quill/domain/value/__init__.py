"""Domain value objects for Quill."""

from quill.domain.value.identifiers import CategoryId, PostId, UserId
from quill.domain.value.types import PostStatus, Slug

__all__ = [
    # Identifiers
    "PostId",
    "CategoryId",
    "UserId",
    # Types
    "PostStatus",
    "Slug",
]
