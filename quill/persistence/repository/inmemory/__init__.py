"""In-memory repository implementations for testing."""

from .category import InMemoryCategoryRepository
from .post import InMemoryPostRepository
from .store import InMemoryStore

__all__ = [
    "InMemoryCategoryRepository",
    "InMemoryPostRepository",
    "InMemoryStore",
]
