"""Admin category routes.

Update and delete carry the category id in the request body.
"""

from typing import Optional

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, status
from pydantic import PositiveInt

from quill.application.usecase.category import (
    CreateCategoryRequest,
    CreateCategoryResponse,
    CreateCategoryUseCase,
    DeleteCategoryRequest,
    DeleteCategoryResponse,
    DeleteCategoryUseCase,
    GetCategoryRequest,
    GetCategoryResponse,
    GetCategoryUseCase,
    ListCategoriesRequest,
    ListCategoriesResponse,
    ListCategoriesUseCase,
    UpdateCategoryRequest,
    UpdateCategoryResponse,
    UpdateCategoryUseCase,
)
from quill.application.usecase.common import CamelModel
from quill.interface.api.auth import require_admin

router = APIRouter(
    prefix="/admin/categories",
    tags=["admin"],
    route_class=DishkaRoute,
    dependencies=[Depends(require_admin)],
)


class CategoryAPIRequest(CamelModel):
    """API request body for creating a category."""

    name: str
    description: Optional[str] = None


class UpdateCategoryAPIRequest(CategoryAPIRequest):
    """API request body for updating a category."""

    id: PositiveInt


class DeleteCategoryAPIRequest(CamelModel):
    """API request body for deleting a category."""

    id: PositiveInt


@router.get("", response_model=ListCategoriesResponse)
async def list_categories(
    use_case: FromDishka[ListCategoriesUseCase],
) -> ListCategoriesResponse:
    """List categories; postCount counts posts of any status."""
    with logfire.span("api.admin.list_categories"):
        return await use_case.execute(ListCategoriesRequest(public=False))


@router.get("/{category_id}", response_model=GetCategoryResponse)
async def get_category(
    category_id: int, use_case: FromDishka[GetCategoryUseCase]
) -> GetCategoryResponse:
    """Get one category with its post count."""
    with logfire.span("api.admin.get_category", category_id=category_id):
        return await use_case.execute(GetCategoryRequest(category_id=category_id))


@router.post(
    "", response_model=CreateCategoryResponse, status_code=status.HTTP_201_CREATED
)
async def create_category(
    body: CategoryAPIRequest, use_case: FromDishka[CreateCategoryUseCase]
) -> CreateCategoryResponse:
    """Create a category; answers with its id and slug."""
    with logfire.span("api.admin.create_category", name=body.name):
        return await use_case.execute(
            CreateCategoryRequest(name=body.name, description=body.description)
        )


@router.put("", response_model=UpdateCategoryResponse)
async def update_category(
    body: UpdateCategoryAPIRequest, use_case: FromDishka[UpdateCategoryUseCase]
) -> UpdateCategoryResponse:
    """Rename or re-describe a category; answers with the current slug."""
    with logfire.span("api.admin.update_category", category_id=body.id):
        return await use_case.execute(
            UpdateCategoryRequest(
                id=body.id, name=body.name, description=body.description
            )
        )


@router.delete("", response_model=DeleteCategoryResponse)
async def delete_category(
    body: DeleteCategoryAPIRequest, use_case: FromDishka[DeleteCategoryUseCase]
) -> DeleteCategoryResponse:
    """Delete a category; its posts are kept."""
    with logfire.span("api.admin.delete_category", category_id=body.id):
        return await use_case.execute(DeleteCategoryRequest(id=body.id))
