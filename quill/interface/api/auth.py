"""Admin session check for API routes."""

from fastapi import Cookie, Header, Request

from quill.domain.service import JWTService
from quill.domain.value import UserId


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


async def require_admin(
    request: Request,
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> UserId:
    """Authenticate the admin session of the current request.

    The token is read from the ``auth_token`` cookie, falling back to an
    ``Authorization: Bearer`` header.

    Returns:
        ID of the authenticated user

    Raises:
        NotAuthorizedError: If no valid session token was sent
    """
    token = auth_token or _bearer_token(authorization)
    jwt_service = await request.state.dishka_container.get(JWTService)
    return jwt_service.authenticate(token)
