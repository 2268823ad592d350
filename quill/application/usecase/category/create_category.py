"""Create category use case."""

from typing import Optional

import logfire

from quill.application.usecase.common import CamelModel
from quill.domain.service import CategoryService


class CreateCategoryRequest(CamelModel):
    """Create category request."""

    name: str
    description: Optional[str] = None


class CreateCategoryResponse(CamelModel):
    """Create category response."""

    id: int
    slug: str


class CreateCategoryUseCase:
    """Use case for creating a category."""

    def __init__(self, category_service: CategoryService) -> None:
        """Initialize create category use case.

        Args:
            category_service: Category domain service
        """
        self.category_service = category_service

    async def execute(self, request: CreateCategoryRequest) -> CreateCategoryResponse:
        """Execute create category flow.

        Raises:
            ValidationError: If name or description is invalid
            ConflictError: If the name is already taken
        """
        with logfire.span("create_category.execute", name=request.name):
            category = await self.category_service.create_category(
                name=request.name, description=request.description
            )
            return CreateCategoryResponse(id=category.id, slug=str(category.slug))
