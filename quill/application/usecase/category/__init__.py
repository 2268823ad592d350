"""Category use cases."""

from .create_category import (
    CreateCategoryRequest,
    CreateCategoryResponse,
    CreateCategoryUseCase,
)
from .delete_category import (
    DeleteCategoryRequest,
    DeleteCategoryResponse,
    DeleteCategoryUseCase,
)
from .get_category import GetCategoryRequest, GetCategoryResponse, GetCategoryUseCase
from .list_categories import (
    ListCategoriesRequest,
    ListCategoriesResponse,
    ListCategoriesUseCase,
)
from .update_category import (
    UpdateCategoryRequest,
    UpdateCategoryResponse,
    UpdateCategoryUseCase,
)

__all__ = [
    "CreateCategoryRequest",
    "CreateCategoryResponse",
    "CreateCategoryUseCase",
    "DeleteCategoryRequest",
    "DeleteCategoryResponse",
    "DeleteCategoryUseCase",
    "GetCategoryRequest",
    "GetCategoryResponse",
    "GetCategoryUseCase",
    "ListCategoriesRequest",
    "ListCategoriesResponse",
    "ListCategoriesUseCase",
    "UpdateCategoryRequest",
    "UpdateCategoryResponse",
    "UpdateCategoryUseCase",
]
