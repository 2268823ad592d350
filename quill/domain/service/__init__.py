"""Domain services."""

from .base import Service
from .category_service import CategoryService
from .jwt_service import JWTService
from .pagination import Page, PageRequest, Pagination
from .post_service import PostService
from .query_service import PostQueryService

__all__ = [
    "CategoryService",
    "JWTService",
    "Page",
    "PageRequest",
    "Pagination",
    "PostQueryService",
    "PostService",
    "Service",
]
