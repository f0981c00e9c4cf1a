"""Request/response schemas for auth endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.schemas.base import CamelModel


class RegisterRequest(BaseModel):
    """New account; always created with role 'usuario'."""

    username: str = Field(..., min_length=3, max_length=50, description="Username")
    email: str = Field(..., min_length=3, max_length=255, description="Email address")
    password: str = Field(..., min_length=8, max_length=128, description="Password")
    nombre: str | None = Field(default=None, max_length=100)
    apellido: str | None = Field(default=None, max_length=100)
    telefono: str | None = Field(default=None, max_length=20)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip().lower()
        local, _, domain = v.partition("@")
        if not local or "." not in domain:
            raise ValueError("email must look like name@domain.tld")
        return v


class LoginRequest(BaseModel):
    """Credentials for login; username may also be the account email."""

    username: str = Field(..., min_length=1, max_length=255, description="Username or email")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class TokenResponse(BaseModel):
    """JWT access token returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")


class CurrentUser(BaseModel):
    """Claims of the verified bearer token, attached to the request by the access gate."""

    id: int
    username: str
    email: str | None = None
    role: str
    # Only delegated tokens carry permissions; session tokens leave this empty.
    permissions: list[str] = Field(default_factory=list)


class UserProfile(CamelModel):
    """Public profile fields of a user (no password, no token columns)."""

    id: int
    username: str
    email: str
    nombre: str | None = None
    apellido: str | None = None
    telefono: str | None = None
    role: str
    created_at: datetime | None = None
    last_login: datetime | None = None
