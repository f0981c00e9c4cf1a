"""Permission catalog lookups and per-user permission assignments (usuario_permisos)."""

import logging
from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from app.core.errors import ErrorKind, ServiceError
from app.core.permissions import PERMISSION_CATALOG
from app.models import Permission, User, UserPermission

logger = logging.getLogger(__name__)


def list_permissions(db: Session) -> list[Permission]:
    return db.query(Permission).order_by(Permission.id).all()


def get_user_permission_names(db: Session, user_id: int) -> list[str]:
    """Permissions assigned to the user in usuario_permisos (live state, not token claims)."""
    rows = (
        db.query(Permission.name)
        .join(UserPermission, UserPermission.permission_id == Permission.id)
        .filter(UserPermission.user_id == user_id)
        .order_by(Permission.id)
        .all()
    )
    return [name for (name,) in rows]


def dedupe(names: Iterable[str]) -> list[str]:
    """Drop repeated names, keeping the first occurrence order."""
    return list(dict.fromkeys(names))


def split_known_permissions(
    db: Session, names: Sequence[str]
) -> tuple[list[str], list[str]]:
    """
    Partition requested names into (known, unknown) against the permisos table.

    Both lists keep the order of ``names``.
    """
    if not names:
        return [], []
    found = {
        name
        for (name,) in db.query(Permission.name).filter(Permission.name.in_(list(names))).all()
    }
    known = [n for n in names if n in found]
    unknown = [n for n in names if n not in found]
    return known, unknown


def replace_user_permissions(db: Session, user_id: int, names: Sequence[str]) -> list[str]:
    """
    Replace the user's assignment set with ``names``.

    Raises ServiceError NOT_FOUND for an unknown user and INVALID_INPUT (listing the
    unknown names) if any name is missing from the catalog; nothing is written then.
    """
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise ServiceError(ErrorKind.NOT_FOUND, "User not found.")

    requested = dedupe(names)
    known, unknown = split_known_permissions(db, requested)
    if unknown:
        raise ServiceError(
            ErrorKind.INVALID_INPUT,
            "Some requested permissions are not valid.",
            invalid_permissions=unknown,
            valid_permissions=known,
        )

    permissions = db.query(Permission).filter(Permission.name.in_(known)).all() if known else []
    db.query(UserPermission).filter(UserPermission.user_id == user_id).delete(
        synchronize_session=False
    )
    for permission in permissions:
        db.add(UserPermission(user_id=user_id, permission_id=permission.id))
    db.commit()
    return get_user_permission_names(db, user_id)


def seed_permission_catalog(db: Session) -> int:
    """Insert catalog entries missing from the permisos table. Idempotent; returns rows added."""
    existing = {name for (name,) in db.query(Permission.name).all()}
    added = 0
    for name, description in PERMISSION_CATALOG.items():
        if name in existing:
            continue
        db.add(Permission(name=name, description=description))
        added += 1
    db.commit()
    if added:
        logger.info("Seeded %s permission(s) into the catalog", added)
    return added
