"""Seed the fixed permission catalog.

Revision ID: 20261019010000
Revises: 20261019000000
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20261019010000"
down_revision: Union[str, None] = "20261019000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Frozen copy of the catalog at this revision; later additions get their own migration.
PERMISSIONS = [
    ("view_products", "View the product catalog"),
    ("create_products", "Create products"),
    ("edit_products", "Edit existing products"),
    ("delete_products", "Delete products"),
    ("view_reports", "View sales, product and customer reports"),
    ("view_users", "View the user list"),
    ("manage_users", "Change user roles and permissions"),
    ("view_dashboard", "View the admin dashboard"),
]

permisos = sa.table(
    "permisos",
    sa.column("nombre", sa.String),
    sa.column("descripcion", sa.String),
)


def upgrade() -> None:
    op.bulk_insert(
        permisos,
        [{"nombre": name, "descripcion": description} for name, description in PERMISSIONS],
    )


def downgrade() -> None:
    op.execute(
        permisos.delete().where(permisos.c.nombre.in_([name for name, _ in PERMISSIONS]))
    )
