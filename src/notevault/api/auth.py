"""Authentication API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from ..core.schemas.common import ApiResponse
from ..core.services import AuthService
from ..database import get_db_session
from ..middleware.auth import get_current_token, get_current_user_id

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register", response_model=ApiResponse[TokenResponse], status_code=status.HTTP_201_CREATED
)
async def register(request: RegisterRequest, session: AsyncSession = Depends(get_db_session)):
    """Register a new user."""
    auth_service = AuthService(session)
    return ApiResponse(
        data=await auth_service.register_user(request), message="User registered successfully"
    )


@router.post("/login", response_model=ApiResponse[TokenResponse])
async def login(request: LoginRequest, session: AsyncSession = Depends(get_db_session)):
    """Login user and get a JWT."""
    auth_service = AuthService(session)
    return ApiResponse(data=await auth_service.authenticate_user(request), message="Login successful")


@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_current_user(
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Get current user profile."""
    auth_service = AuthService(session)
    return ApiResponse(data=await auth_service.get_current_user(current_user_id))


@router.post("/logout", response_model=ApiResponse[dict])
async def logout(
    token: str = Depends(get_current_token),
    session: AsyncSession = Depends(get_db_session),
):
    """Revoke the current token."""
    auth_service = AuthService(session)
    revoked = await auth_service.logout_user(token)
    return ApiResponse(data={"revoked": revoked}, message="Logged out")
