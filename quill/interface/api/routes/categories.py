"""Public category routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from quill.application.usecase.category import (
    ListCategoriesRequest,
    ListCategoriesResponse,
    ListCategoriesUseCase,
)

router = APIRouter(prefix="/categories", tags=["categories"], route_class=DishkaRoute)


@router.get(
    "",
    response_model=ListCategoriesResponse,
    summary="List categories",
    description="All categories ordered by name; postCount counts published posts.",
)
async def list_categories(
    use_case: FromDishka[ListCategoriesUseCase],
) -> ListCategoriesResponse:
    """List categories with published post counts."""
    with logfire.span("api.list_categories"):
        return await use_case.execute(ListCategoriesRequest(public=True))
