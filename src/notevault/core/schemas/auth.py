"""
Authentication schemas.

Format checks (email syntax, password and username length) happen in
AuthService so they surface as InvalidInput with the same envelope as every
other domain error.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """User login request schema."""

    email: str = Field(max_length=255, description="Account email")
    password: str = Field(max_length=128, description="User password")

    model_config = ConfigDict(
        json_schema_extra={"example": {"email": "a@example.com", "password": "securepassword123"}}
    )


class RegisterRequest(BaseModel):
    """User registration request schema."""

    email: str = Field(max_length=255, description="Unique email address")
    username: str = Field(max_length=255, description="Unique username, 3 to 100 characters")
    password: str = Field(max_length=128, description="User password, at least 8 characters")
    full_name: Optional[str] = Field(default=None, max_length=100, description="Full name")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "new_user@example.com",
                "username": "new_user",
                "password": "securepassword123",
                "full_name": "New User",
            }
        }
    )


class UserResponse(BaseModel):
    """User information response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID = Field(description="User unique identifier")
    email: str = Field(description="Email address")
    username: str = Field(description="Username")
    full_name: Optional[str] = Field(default=None, description="Full name")
    is_active: bool = Field(description="Whether user account is active")
    created_at: datetime = Field(description="Account creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")


class TokenResponse(BaseModel):
    """JWT token response schema."""

    access_token: str = Field(description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(description="Token expiration time in seconds")
    user: UserResponse = Field(description="User information")
