"""User accounts: registration, credential checks and role changes."""

import logging
from datetime import UTC, datetime

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.config import ROLE_USER, ROLES
from app.core.errors import ErrorKind, ServiceError
from app.core.security import hash_password, verify_password
from app.models import User

logger = logging.getLogger(__name__)


def create_user(
    db: Session,
    username: str,
    email: str,
    password: str,
    role: str = ROLE_USER,
    nombre: str | None = None,
    apellido: str | None = None,
    telefono: str | None = None,
) -> User:
    """Insert a new user. Raises ServiceError INVALID_INPUT on a taken username/email or bad role."""
    if role not in ROLES:
        raise ServiceError(
            ErrorKind.INVALID_INPUT,
            f"Invalid role. Allowed roles are: {', '.join(ROLES)}",
        )
    existing = (
        db.query(User)
        .filter(or_(User.username == username, User.email == email))
        .first()
    )
    if existing is not None:
        raise ServiceError(ErrorKind.INVALID_INPUT, "Username or email is already registered.")

    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
        role=role,
        nombre=nombre,
        apellido=apellido,
        telefono=telefono,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s with role %s", user.id, role)
    return user


def authenticate(db: Session, login: str, password: str) -> User | None:
    """Return the user for a username-or-email and password, stamping last_login; else None."""
    user = db.query(User).filter(or_(User.username == login, User.email == login.lower())).first()
    if user is None or not verify_password(password, user.password_hash):
        return None
    user.last_login = datetime.now(UTC)
    db.commit()
    return user


def change_role(db: Session, user_id: int, new_role: str) -> User:
    if new_role not in ROLES:
        raise ServiceError(
            ErrorKind.INVALID_INPUT,
            f"Invalid role. Allowed roles are: {', '.join(ROLES)}",
        )
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise ServiceError(ErrorKind.NOT_FOUND, "User not found.")
    user.role = new_role
    db.commit()
    logger.info("User %s role changed to %s", user_id, new_role)
    return user
