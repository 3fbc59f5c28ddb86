"""Authentication schemas."""

from pydantic import EmailStr, Field

from festival.models.enums import Role
from festival.schemas.common import CamelModel


class UserRegister(CamelModel):
    """User registration request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=6, max_length=72)
    name: str = Field(..., min_length=1, max_length=255)
    role: Role = Role.BUYER


class UserLogin(CamelModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=72)


class UserUpdate(CamelModel):
    """Profile update request."""

    name: str = Field(..., min_length=1, max_length=255)


class UserResponse(CamelModel):
    """User information response."""

    id: str
    email: str
    name: str
    role: Role


class AuthResponse(CamelModel):
    """Authentication response with token and user info."""

    user: UserResponse
    token: str
