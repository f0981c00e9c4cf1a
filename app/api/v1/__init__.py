"""API routes."""

from fastapi import APIRouter

from app.api.v1 import access, admin, auth, health, products, reports

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(products.router, prefix="/products", tags=["products"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(reports.router, prefix="/reports", tags=["reports"])
router.include_router(access.router, prefix="/access", tags=["access"])
