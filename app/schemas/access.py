"""Request/response schemas for delegated access token endpoints (/access)."""

from datetime import datetime

from pydantic import BaseModel, Field, StrictInt

from app.schemas.base import CamelModel


class GenerateAccessRequest(CamelModel):
    """Body of POST /access/generate. Missing fields are rejected by the service with 400."""

    user_id: int | None = None
    permissions: list[str] | None = None
    duration: StrictInt | str | None = Field(
        default=None,
        description="Whole hours, e.g. 8, \"8\" or \"8h\". Defaults to 8.",
    )


class AccessTokenIssuedResponse(CamelModel):
    message: str = "Access token generated successfully"
    token: str
    expires_at: datetime
    permissions: list[str]


class VerifyAccessRequest(BaseModel):
    token: str | None = None


class TokenOwner(CamelModel):
    id: int
    username: str
    email: str
    role: str


class VerifyAccessResponse(CamelModel):
    message: str = "Token valid"
    user: TokenOwner
    permissions: list[str]
    expires_at: datetime | None = None


class RevokeAccessRequest(CamelModel):
    user_id: int | None = None


class MessageResponse(BaseModel):
    message: str


class PermissionItem(CamelModel):
    id: int
    name: str
    description: str | None = None
