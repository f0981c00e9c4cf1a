"""Pydantic schemas for the admin module (dashboard, users, roles, permission assignments)."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from app.schemas.base import CamelModel


class DashboardStats(CamelModel):
    users: int
    products: int
    categories: int
    orders: int
    recent_sales: float = Field(description="Sum of order totals over the last 30 days")
    server_time: datetime
    server_ip: str


class AdminUserItem(CamelModel):
    """User entry for the admin list (no password, no token columns)."""

    id: int
    username: str
    email: str
    nombre: str | None = None
    apellido: str | None = None
    telefono: str | None = None
    role: str
    created_at: datetime | None = None
    last_login: datetime | None = None


class ChangeRoleRequest(CamelModel):
    user_id: int
    new_role: str


class UserPermissionsRequest(CamelModel):
    permissions: list[str]


class UserPermissionsResponse(CamelModel):
    user_id: int
    permissions: list[str]
    source: Literal["assignment"] = "assignment"
