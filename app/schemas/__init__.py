"""Pydantic request/response schemas."""

from app.schemas.access import (
    AccessTokenIssuedResponse,
    GenerateAccessRequest,
    MessageResponse,
    PermissionItem,
    RevokeAccessRequest,
    VerifyAccessRequest,
    VerifyAccessResponse,
)
from app.schemas.auth import CurrentUser, LoginRequest, RegisterRequest, TokenResponse, UserProfile
from app.schemas.health import HealthResponse
from app.schemas.product import ProductCreate, ProductResponse, ProductUpdate

__all__ = [
    "AccessTokenIssuedResponse",
    "CurrentUser",
    "GenerateAccessRequest",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "PermissionItem",
    "ProductCreate",
    "ProductResponse",
    "ProductUpdate",
    "RegisterRequest",
    "RevokeAccessRequest",
    "TokenResponse",
    "UserProfile",
    "VerifyAccessRequest",
    "VerifyAccessResponse",
]
