"""
Fixed permission catalog.

Rows in the ``permisos`` table are seeded from this list (migration or
``python -m app.scripts.seed_permissions``); the catalog is not editable at runtime.

Only three names are enforced by routes: ``edit_products`` and ``delete_products``
through the assignment table, ``view_reports`` through a delegated token's claims.
The rest can be assigned or delegated but grant nothing on their own: product
reads are public, product creation is gated on the vendor/admin role, and every
/admin route requires the admin role.
"""

PERMISSION_CATALOG: dict[str, str] = {
    # Products
    "view_products": "View the product catalog",
    "create_products": "Create products",
    "edit_products": "Edit existing products",
    "delete_products": "Delete products",
    # Reports
    "view_reports": "View sales, product and customer reports",
    # Users
    "view_users": "View the user list",
    "manage_users": "Change user roles and permissions",
    # Dashboard
    "view_dashboard": "View the admin dashboard",
}

EDIT_PRODUCTS = "edit_products"
DELETE_PRODUCTS = "delete_products"
VIEW_REPORTS = "view_reports"
