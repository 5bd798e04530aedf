"""Authentication schemas for API validation and responses."""

import re
from typing import Any

from pydantic import BaseModel, EmailStr, Field, field_validator


# ============================================================================
# User Schemas
# ============================================================================


class UserBase(BaseModel):
    """Fields shared by registration input and user output."""

    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr
    company: str | None = Field(default=None, max_length=200)
    phone: str | None = Field(default=None, max_length=40)

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class UserCreate(UserBase):
    """Registration request."""

    password: str = Field(..., min_length=8, max_length=72)
    role: str = Field(default="user", min_length=1, max_length=32, pattern=r"^[a-z_]+$")

    @field_validator("password")
    @classmethod
    def password_strength(cls, v: str) -> str:
        if not re.search(r"[A-Za-z]", v):
            raise ValueError("Password must contain at least one letter")
        if not re.search(r"\d", v):
            raise ValueError("Password must contain at least one digit")
        if len(v.encode("utf-8")) > 72:
            raise ValueError("Password must be at most 72 bytes")
        return v


class UserLogin(BaseModel):
    """Login request.

    No password policy here: a wrong password must reach the credential
    check and fail as InvalidCredentials, not as a validation error.
    """

    email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1, max_length=1024)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserResponse(BaseModel):
    """User as returned to clients. Never carries the password digest."""

    id: str
    name: str
    email: str
    role: str
    plan: str
    company: str | None = None
    phone: str | None = None
    is_active: bool
    email_verified: bool
    created_at: str
    last_login: str | None = None

    @classmethod
    def from_row(cls, row: Any) -> "UserResponse":
        return cls(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            role=row["role"],
            plan=row["plan"],
            company=row["company"],
            phone=row["phone"],
            is_active=bool(row["is_active"]),
            email_verified=bool(row["email_verified"]),
            created_at=row["created_at"],
            last_login=row["last_login"],
        )


# ============================================================================
# Token Schemas
# ============================================================================


class TokenPayload(BaseModel):
    """Decoded JWT claims."""

    sub: str
    iat: int
    exp: int


class AuthResponse(BaseModel):
    """Body returned by register and login."""

    success: bool = True
    message: str
    user: UserResponse
    token: str
