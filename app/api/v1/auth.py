"""Registration, login and the access gate dependencies (authentication + authorization)."""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import ROLE_ADMIN, ROLE_VENDOR
from app.core.database import get_db
from app.core.errors import ServiceError, to_http_exception
from app.core.security import TokenVerificationError, create_access_token, verify_token
from app.models.user import User
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserProfile,
)
from app.services import delegation
from app.services.permissions import get_user_permission_names
from app.services.users import authenticate, create_user

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)


@router.post("/register", response_model=UserProfile, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> UserProfile:
    """Create an account with role 'usuario'. Roles are changed later by an admin."""
    try:
        user = create_user(
            db,
            username=body.username.strip(),
            email=body.email,
            password=body.password,
            nombre=body.nombre,
            apellido=body.apellido,
            telefono=body.telefono,
        )
    except ServiceError as e:
        raise to_http_exception(e) from e
    return UserProfile.model_validate(user)


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> TokenResponse:
    """
    Authenticate with username (or email) and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    user = authenticate(db, body.username.strip(), body.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password.",
        )
    return TokenResponse(access_token=create_access_token(user), token_type="bearer")


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT and return its claims.

    401 if no token is presented; 403 if the signature is bad or the token expired.
    Stateless: the user row is not consulted.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access denied. Token not provided.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = verify_token(credentials.credentials)
    except TokenVerificationError as e:
        logger.warning("Rejected bearer token (%s): %s", e.kind.value, e.message)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired token.",
        ) from e
    try:
        return CurrentUser(
            id=int(payload["sub"]),
            username=payload.get("username") or "",
            email=payload.get("email"),
            role=payload.get("role") or "",
            permissions=payload.get("permissions") or [],
        )
    except (TypeError, ValueError) as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid token payload.",
        ) from e


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    if current_user.role != ROLE_ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Administrator privileges required.",
        )
    return current_user


def require_vendor_or_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    if current_user.role not in (ROLE_ADMIN, ROLE_VENDOR):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Vendor or administrator privileges required.",
        )
    return current_user


def require_permissions(*required: str) -> Callable[..., CurrentUser]:
    """
    Dependency factory: the caller must hold at least one of ``required`` in
    usuario_permisos, read fresh on every request. Admins always pass.

    Usage:
        @router.put("/{id}", dependencies=[Depends(require_permissions("edit_products"))])
    """

    def _checker(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
        db: Annotated[Session, Depends(get_db)],
    ) -> CurrentUser:
        if current_user.role == ROLE_ADMIN:
            return current_user
        granted = set(get_user_permission_names(db, current_user.id))
        if granted.isdisjoint(required):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access denied. You do not have sufficient permissions for this action.",
            )
        return current_user

    return _checker


def require_token_permission(permission: str) -> Callable[..., CurrentUser]:
    """
    Dependency factory: the bearer token's embedded ``permissions`` claim must
    contain ``permission``. Admins always pass. Reflects what was granted when the
    token was issued, not the current assignment table.

    The token must also still be the one stored on the user row (token_acceso,
    token_expiracion), so a revoked or superseded delegated token is refused.
    """

    def _checker(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
        credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
        db: Annotated[Session, Depends(get_db)],
    ) -> CurrentUser:
        if current_user.role == ROLE_ADMIN:
            return current_user
        if permission in current_user.permissions and credentials is not None:
            try:
                delegation.verify(db, credentials.credentials)
            except delegation.DelegationError as e:
                logger.warning(
                    "Delegated token for user %s refused (%s): %s",
                    current_user.id,
                    e.kind.value,
                    e.message,
                )
            else:
                return current_user
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Access denied. Permission required: {permission}",
        )

    return _checker


@router.get("/profile", response_model=UserProfile)
def get_profile(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserProfile:
    user = db.query(User).filter(User.id == current_user.id).first()
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
    return UserProfile.model_validate(user)
