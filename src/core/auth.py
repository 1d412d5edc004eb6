"""Authentication dependencies: bearer session tokens issued at login."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from db.session import get_async_session
from models.user_session import UserSession
from services import session_service
from services.exceptions import NotAuthenticatedError


# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str:
    """
    Dependency that extracts the bearer token from the Authorization header.

    Raises:
        NotAuthenticatedError: If no bearer token was sent.
    """
    if credentials is None or not credentials.credentials:
        raise NotAuthenticatedError()
    return credentials.credentials


async def get_current_session(
    token: str = Depends(get_bearer_token),
    db: AsyncSession = Depends(get_async_session),
) -> UserSession:
    """
    Dependency that resolves the bearer token to the caller's session.

    Every identity-scoped route depends on this, so favorites are always keyed by
    the username the session was issued for.
    """
    return await session_service.resolve(db, token)
