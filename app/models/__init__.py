"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.catalog import Category, Order, OrderItem, Product
from app.models.permission import Permission, UserPermission
from app.models.user import User

__all__ = [
    "Base",
    "Category",
    "Order",
    "OrderItem",
    "Permission",
    "Product",
    "User",
    "UserPermission",
]
