"""Session token domain service."""

import logfire

from quill.config import AuthSettings
from quill.domain.error import NotAuthorizedError
from quill.domain.value import UserId
from quill.util.error import JWTError
from quill.util.jwt import create_token, verify_token

from .base import Service


class JWTService(Service):
    """Verifies admin session tokens issued by the external login service."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: str) -> str:
        """Create a session token for a user (tooling and tests only).

        Args:
            user_id: External user ID

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id):
            token = create_token(user_id, self.auth_settings)
            logfire.info("JWT token created", user_id=user_id)
            return token

    def authenticate(self, token: str | None) -> UserId:
        """Verify a session token and return the user it carries.

        Args:
            token: JWT token string from cookie or Authorization header

        Returns:
            ID of the authenticated user

        Raises:
            NotAuthorizedError: If the token is missing, invalid or expired
        """
        if not token:
            raise NotAuthorizedError()

        with logfire.span("jwt_service.authenticate"):
            try:
                payload = verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise NotAuthorizedError("Invalid or expired session")

            logfire.info("JWT token verified", user_id=payload.sub)
            return UserId(payload.sub)
