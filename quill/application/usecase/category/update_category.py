"""Update category use case."""

from typing import Optional

import logfire

from quill.application.usecase.common import CamelModel
from quill.domain.service import CategoryService
from quill.domain.value import CategoryId


class UpdateCategoryRequest(CamelModel):
    """Update category request."""

    id: int
    name: str
    description: Optional[str] = None


class UpdateCategoryResponse(CamelModel):
    """Update category response.

    Callers must use the returned slug to refresh any cached category URLs.
    """

    success: bool = True
    slug: str


class UpdateCategoryUseCase:
    """Use case for renaming or re-describing a category."""

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(self, request: UpdateCategoryRequest) -> UpdateCategoryResponse:
        """Execute update category flow.

        Raises:
            NotFoundError: If the category doesn't exist
            ValidationError: If name or description is invalid
            ConflictError: If the name is taken by another category
        """
        with logfire.span("update_category.execute", category_id=request.id):
            category = await self.category_service.update_category(
                CategoryId(request.id),
                name=request.name,
                description=request.description,
            )
            return UpdateCategoryResponse(slug=str(category.slug))
