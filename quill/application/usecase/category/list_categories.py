"""List categories use case."""

import logfire

from quill.application.usecase.common import CamelModel, CategoryItem
from quill.domain.service import CategoryService


class ListCategoriesRequest(CamelModel):
    """List categories request.

    The public listing counts only published posts; the admin listing counts
    every associated post.
    """

    public: bool = True


class ListCategoriesResponse(CamelModel):
    """List categories response."""

    categories: list[CategoryItem]


class ListCategoriesUseCase:
    """Use case for listing categories with post counts."""

    def __init__(self, category_service: CategoryService) -> None:
        """Initialize list categories use case.

        Args:
            category_service: Category domain service
        """
        self.category_service = category_service

    async def execute(self, request: ListCategoriesRequest) -> ListCategoriesResponse:
        """Execute list categories flow.

        Returns:
            All categories ordered by name
        """
        with logfire.span("list_categories.execute", public=request.public):
            categories = await self.category_service.list_categories(
                published_only=request.public
            )
            return ListCategoriesResponse(
                categories=[CategoryItem.from_domain(c) for c in categories]
            )
