"""Get category use case."""

import logfire

from quill.application.usecase.common import CamelModel, CategoryItem
from quill.domain.service import CategoryService
from quill.domain.value import CategoryId


class GetCategoryRequest(CamelModel):
    """Get category request."""

    category_id: int


class GetCategoryResponse(CamelModel):
    """Get category response."""

    category: CategoryItem


class GetCategoryUseCase:
    """Use case for retrieving one category with its post count."""

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(self, request: GetCategoryRequest) -> GetCategoryResponse:
        """Execute get category flow.

        Raises:
            NotFoundError: If the category doesn't exist
        """
        with logfire.span("get_category.execute", category_id=request.category_id):
            item = await self.category_service.get_category(
                CategoryId(request.category_id)
            )
            return GetCategoryResponse(category=CategoryItem.from_domain(item))
