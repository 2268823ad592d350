"""Domain layer DI providers."""

from dishka import Scope, provide

from quill.config import AuthSettings, ContentSettings
from quill.domain.repository import CategoryRepository, PostRepository
from quill.domain.service import (
    CategoryService,
    JWTService,
    PostQueryService,
    PostService,
)
from quill.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide session token service (stateless)."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_post_service(
        self,
        post_repository: PostRepository,
        category_repository: CategoryRepository,
        content_settings: ContentSettings,
    ) -> PostService:
        """Provide post domain service."""
        return PostService(
            post_repository=post_repository,
            category_repository=category_repository,
            content_settings=content_settings,
        )

    @provide
    def get_category_service(
        self,
        category_repository: CategoryRepository,
        content_settings: ContentSettings,
    ) -> CategoryService:
        """Provide category domain service."""
        return CategoryService(
            category_repository=category_repository,
            content_settings=content_settings,
        )

    @provide
    def get_post_query_service(self, post_repository: PostRepository) -> PostQueryService:
        """Provide post query service."""
        return PostQueryService(post_repository=post_repository)
