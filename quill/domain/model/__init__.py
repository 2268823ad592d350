"""Domain model entities for Quill."""

from quill.domain.model.category import Category, CategoryWithCount
from quill.domain.model.post import Post

__all__ = [
    "Post",
    "Category",
    "CategoryWithCount",
]
