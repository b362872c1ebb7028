"""Authentication service implementation."""

from uuid import UUID

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ...security import (
    blacklist_token,
    burn_verification,
    create_access_token,
    hash_password,
    verify_password,
)
from ..errors import Conflict, InvalidInput, Unauthenticated, Unverified
from ..logging import get_logger
from ..models.user import User
from ..repositories.user_repository import UserRepository
from ..schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from .interfaces import IAuthService

logger = get_logger("services.auth")


def normalize_email(email: str) -> str:
    """Lower-case, trimmed, syntactically valid email or InvalidInput."""
    candidate = (email or "").strip().lower()
    try:
        validate_email(candidate, check_deliverability=False)
    except EmailNotValidError as e:
        raise InvalidInput("Invalid email format") from e
    return candidate


class AuthService(IAuthService):
    """Authentication service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)
        self.settings = get_settings()

    async def register_user(self, request: RegisterRequest) -> TokenResponse:
        """Register new user."""
        email = normalize_email(request.email)
        username = request.username.strip()
        if not (
            self.settings.username_min_length
            <= len(username)
            <= self.settings.username_max_length
        ):
            raise InvalidInput(
                f"Username must be between {self.settings.username_min_length} and "
                f"{self.settings.username_max_length} characters"
            )
        if len(request.password) < self.settings.password_min_length:
            raise InvalidInput(
                f"Password must be at least {self.settings.password_min_length} characters"
            )

        if await self.user_repo.is_email_taken(email):
            raise Conflict("Email already registered")
        if await self.user_repo.is_username_taken(username):
            raise Conflict("Username already taken")

        user = await self.user_repo.create_user(
            email=email,
            username=username,
            password_hash=hash_password(request.password),
            full_name=(request.full_name or "").strip() or None,
        )
        logger.info("User registered", extra={"user_id": str(user.id)})
        return self._token_response(user)

    async def authenticate_user(self, request: LoginRequest) -> TokenResponse:
        """Login user and return JWT token."""
        user_id = await self.verify_credentials(request.email, request.password)
        user = await self.user_repo.get_by_id(user_id)
        return self._token_response(user)

    async def verify_credentials(self, email: str, password: str) -> UUID:
        user = await self.user_repo.get_by_email(email or "")
        if user is None:
            burn_verification(password)
            raise Unauthenticated("Invalid email or password")
        if not verify_password(password, user.password_hash):
            logger.warning("Failed login", extra={"user_id": str(user.id)})
            raise Unauthenticated("Invalid email or password")
        if not user.is_active:
            raise Unauthenticated("Account is disabled")
        if not user.is_verified:
            raise Unverified("Email address is not verified")
        return user.id

    async def get_current_user(self, user_id: UUID) -> UserResponse:
        user = await self.user_repo.get_by_id(user_id)
        if user is None or not user.is_active:
            raise Unauthenticated("User no longer exists")
        return UserResponse.model_validate(user)

    async def logout_user(self, access_token: str) -> bool:
        """Blacklist the token; False when Redis could not record it."""
        return await blacklist_token(access_token)

    def _token_response(self, user: User) -> TokenResponse:
        return TokenResponse(
            access_token=create_access_token(user.id, user.email, user.username),
            token_type="bearer",
            expires_in=self.settings.access_token_expire_minutes * 60,
            user=UserResponse.model_validate(user),
        )
