"""Delete category use case."""

import logfire

from quill.application.usecase.common import CamelModel
from quill.domain.service import CategoryService
from quill.domain.value import CategoryId


class DeleteCategoryRequest(CamelModel):
    """Delete category request."""

    id: int


class DeleteCategoryResponse(CamelModel):
    """Delete category response."""

    success: bool = True


class DeleteCategoryUseCase:
    """Use case for deleting a category; its posts are kept."""

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(self, request: DeleteCategoryRequest) -> DeleteCategoryResponse:
        """Execute delete category flow.

        Raises:
            NotFoundError: If the category doesn't exist
        """
        with logfire.span("delete_category.execute", category_id=request.id):
            await self.category_service.delete_category(CategoryId(request.id))
            return DeleteCategoryResponse()
