"""Authentication Pydantic schemas for API validation."""

from .auth import (
    AuthResponse,
    TokenPayload,
    UserBase,
    UserCreate,
    UserLogin,
    UserResponse,
)

__all__ = [
    "AuthResponse",
    "TokenPayload",
    "UserBase",
    "UserCreate",
    "UserLogin",
    "UserResponse",
]
