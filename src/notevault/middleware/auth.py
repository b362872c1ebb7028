"""Authentication dependencies."""

from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.errors import Unauthenticated
from ..core.repositories.user_repository import UserRepository
from ..database import get_db_session
from ..security import get_user_id_from_token


class JWTBearer(HTTPBearer):
    """JWT Bearer token authentication.

    Resolves to the token's user id; every failure is Unauthenticated.
    """

    def __init__(self):
        super().__init__(auto_error=False)

    async def __call__(self, request: Request) -> UUID:
        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)
        if credentials is None or credentials.scheme.lower() != "bearer":
            raise Unauthenticated("Missing bearer token")

        user_id = await get_user_id_from_token(credentials.credentials)
        if user_id is None:
            raise Unauthenticated("Invalid or expired token")

        request.state.access_token = credentials.credentials
        return user_id


# Dependency for getting current user ID from JWT
async def get_current_user_id(
    user_id: UUID = Depends(JWTBearer()),
    session: AsyncSession = Depends(get_db_session),
) -> UUID:
    """Get current authenticated user ID; the account must still exist and be active."""
    user = await UserRepository(session).get_by_id(user_id)
    if user is None or not user.is_active:
        raise Unauthenticated("User no longer exists")
    return user_id


async def get_current_token(
    request: Request, user_id: UUID = Depends(get_current_user_id)
) -> str:
    """Raw bearer token of an authenticated request."""
    return request.state.access_token
