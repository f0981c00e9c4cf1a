"""Admin module: dashboard, user list, role changes and permission assignments. Admin only."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.v1.auth import require_admin
from app.core.config import get_settings
from app.core.database import get_db
from app.core.errors import ServiceError, to_http_exception
from app.models import User
from app.schemas.access import MessageResponse
from app.schemas.admin import (
    AdminUserItem,
    ChangeRoleRequest,
    DashboardStats,
    UserPermissionsRequest,
    UserPermissionsResponse,
)
from app.services.permissions import get_user_permission_names, replace_user_permissions
from app.services.reports import dashboard_counts
from app.services.users import change_role

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/dashboard", response_model=DashboardStats)
def get_dashboard_stats(
    db: Annotated[Session, Depends(get_db)],
) -> DashboardStats:
    """Table counts, sales of the last 30 days and server identity."""
    return DashboardStats(
        **dashboard_counts(db),
        server_time=datetime.now(UTC),
        server_ip=get_settings().SERVER_IP,
    )


@router.get("/users", response_model=list[AdminUserItem])
def list_users(
    db: Annotated[Session, Depends(get_db)],
) -> list[AdminUserItem]:
    users = db.query(User).order_by(User.id).all()
    return [AdminUserItem.model_validate(u) for u in users]


@router.put("/users/role", response_model=MessageResponse)
def change_user_role(
    body: ChangeRoleRequest,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    try:
        change_role(db, body.user_id, body.new_role)
    except ServiceError as e:
        raise to_http_exception(e) from e
    return MessageResponse(message=f"User role updated successfully to {body.new_role}")


@router.get("/users/{user_id}/permissions", response_model=UserPermissionsResponse)
def get_user_permissions(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> UserPermissionsResponse:
    if db.query(User.id).filter(User.id == user_id).first() is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
    return UserPermissionsResponse(
        user_id=user_id, permissions=get_user_permission_names(db, user_id)
    )


@router.put("/users/{user_id}/permissions", response_model=UserPermissionsResponse)
def set_user_permissions(
    user_id: int,
    body: UserPermissionsRequest,
    db: Annotated[Session, Depends(get_db)],
) -> UserPermissionsResponse:
    """Replace the user's permission assignments (usuario_permisos) with the given set."""
    try:
        permissions = replace_user_permissions(db, user_id, body.permissions)
    except ServiceError as e:
        raise to_http_exception(e) from e
    return UserPermissionsResponse(user_id=user_id, permissions=permissions)
