"""PostgreSQL repository implementations."""

from quill.persistence.repository.category import PostgresCategoryRepository
from quill.persistence.repository.post import PostgresPostRepository

__all__ = [
    "PostgresCategoryRepository",
    "PostgresPostRepository",
]
