"""Repository interfaces for the Quill domain.

Interfaces are defined here (dependency inversion); PostgreSQL and
in-memory implementations live in the persistence layer.
"""

from quill.domain.repository.category import CategoryRepository
from quill.domain.repository.post import PostFilter, PostRepository, PostSortOrder

__all__ = [
    "CategoryRepository",
    "PostFilter",
    "PostRepository",
    "PostSortOrder",
]
