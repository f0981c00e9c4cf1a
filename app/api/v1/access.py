"""Delegated access tokens: admins issue and revoke scoped tokens; anyone may verify one."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import require_admin
from app.core.database import get_db
from app.core.errors import ServiceError, to_http_exception
from app.schemas.access import (
    AccessTokenIssuedResponse,
    GenerateAccessRequest,
    MessageResponse,
    PermissionItem,
    RevokeAccessRequest,
    VerifyAccessRequest,
    VerifyAccessResponse,
)
from app.schemas.auth import CurrentUser
from app.services import delegation

router = APIRouter()


@router.post("/generate", response_model=AccessTokenIssuedResponse)
def generate_access_token(
    body: GenerateAccessRequest,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> AccessTokenIssuedResponse:
    """
    Issue a token for another user carrying only the listed permissions.

    duration is in whole hours (default 8). When any permission is unknown the
    400 response lists the ones that are valid.
    """
    try:
        return delegation.issue(
            db,
            issuer=admin,
            user_id=body.user_id,
            permissions=body.permissions,
            duration=body.duration,
        )
    except ServiceError as e:
        raise to_http_exception(e) from e


@router.post("/verify", response_model=VerifyAccessResponse)
def verify_access_token(
    body: VerifyAccessRequest,
    db: Annotated[Session, Depends(get_db)],
) -> VerifyAccessResponse:
    """Public: lets a client check a delegated token before using it."""
    try:
        return delegation.verify(db, body.token)
    except ServiceError as e:
        raise to_http_exception(e) from e


@router.post("/revoke", response_model=MessageResponse)
def revoke_access_token(
    body: RevokeAccessRequest,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    try:
        delegation.revoke(db, issuer=admin, user_id=body.user_id)
    except ServiceError as e:
        raise to_http_exception(e) from e
    return MessageResponse(message="Access token revoked successfully")


@router.get("/permissions", response_model=list[PermissionItem])
def get_all_permissions(
    admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> list[PermissionItem]:
    try:
        permissions = delegation.catalog(db, issuer=admin)
    except ServiceError as e:
        raise to_http_exception(e) from e
    return [PermissionItem.model_validate(p) for p in permissions]
