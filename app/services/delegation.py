"""
Admin-delegated access tokens: issue, verify and revoke scoped tokens for other users.

A delegated token is valid only while both hold:
  * its signature verifies and its embedded exp has not passed, and
  * it equals the token_acceso stored on the user row and token_expiracion has not passed.
Revocation clears the stored columns, so a revoked token is rejected even though
its signature would still verify on its own.
"""

import logging
import re
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy.orm import Session

from app.core.config import ROLE_ADMIN, Settings, get_settings
from app.core.errors import ErrorKind, ServiceError
from app.core.security import TokenVerificationError, create_restricted_token, verify_token
from app.models import Permission, User
from app.schemas.access import AccessTokenIssuedResponse, TokenOwner, VerifyAccessResponse
from app.schemas.auth import CurrentUser
from app.services.permissions import dedupe, list_permissions, split_known_permissions

logger = logging.getLogger(__name__)

_DURATION_RE = re.compile(r"^\s*(\d+)\s*h?\s*$", re.IGNORECASE)


class DelegationError(ServiceError):
    """Raised when a delegated token cannot be issued, verified or revoked."""


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; stored values are always UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _require_admin(issuer: CurrentUser, action: str) -> None:
    if issuer.role != ROLE_ADMIN:
        raise DelegationError(
            ErrorKind.FORBIDDEN,
            f"Access denied. Only administrators can {action}.",
        )


def parse_duration_hours(duration: Any, settings: Settings) -> int:
    """
    Parse a token lifetime in whole hours: 8, "8" or "8h". None or "" means the default.

    Raises DelegationError INVALID_INPUT for anything else, or for a value outside
    1..DELEGATED_TOKEN_MAX_HOURS.
    """
    if duration is None or duration == "":
        return settings.DELEGATED_TOKEN_DEFAULT_HOURS
    hours: int | None = None
    if isinstance(duration, int) and not isinstance(duration, bool):
        hours = duration
    elif isinstance(duration, str):
        match = _DURATION_RE.match(duration)
        if match:
            hours = int(match.group(1))
    if hours is None:
        raise DelegationError(
            ErrorKind.INVALID_INPUT,
            "Invalid duration. Use a whole number of hours, e.g. 8 or \"8h\".",
        )
    if not 1 <= hours <= settings.DELEGATED_TOKEN_MAX_HOURS:
        raise DelegationError(
            ErrorKind.INVALID_INPUT,
            f"Duration must be between 1 and {settings.DELEGATED_TOKEN_MAX_HOURS} hours.",
        )
    return hours


def issue(
    db: Session,
    issuer: CurrentUser,
    user_id: int | None,
    permissions: Any,
    duration: Any = None,
    now: datetime | None = None,
    settings: Settings | None = None,
) -> AccessTokenIssuedResponse:
    """
    Mint a token for ``user_id`` scoped to ``permissions`` and store it on the user row.

    Checks run in order: issuer is admin (FORBIDDEN), input shape (INVALID_INPUT),
    target exists (NOT_FOUND), every permission is in the catalog (INVALID_INPUT,
    with ``valid_permissions`` listing the subset that is).
    """
    settings = settings or get_settings()
    _require_admin(issuer, "generate access tokens")

    if (
        not user_id
        or not isinstance(permissions, list)
        or not permissions
        or not all(isinstance(p, str) and p for p in permissions)
    ):
        raise DelegationError(
            ErrorKind.INVALID_INPUT,
            "Invalid data. userId and a non-empty list of permissions are required.",
        )
    hours = parse_duration_hours(duration, settings)

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise DelegationError(ErrorKind.NOT_FOUND, "User not found.")

    requested = dedupe(permissions)
    valid, invalid = split_known_permissions(db, requested)
    if invalid:
        raise DelegationError(
            ErrorKind.INVALID_INPUT,
            "Some requested permissions are not valid.",
            valid_permissions=valid,
            invalid_permissions=invalid,
        )

    issued_at = now or datetime.now(UTC)
    expires_at = issued_at + timedelta(hours=hours)
    token = create_restricted_token(user, valid, hours=hours, now=issued_at)

    user.access_token = token
    user.token_expiration = expires_at
    db.commit()

    logger.info(
        "[%s] Admin %s generated access token for user %s (permissions=%s, hours=%s)",
        issued_at.isoformat(),
        issuer.id,
        user.id,
        ",".join(valid),
        hours,
    )
    return AccessTokenIssuedResponse(token=token, expires_at=expires_at, permissions=valid)


def verify(db: Session, token: str | None, now: datetime | None = None) -> VerifyAccessResponse:
    """
    Check a delegated token against the stored copy first, then its signature.

    The returned permissions come from the token's own claims, i.e. what was granted
    at issuance, not the user's current assignments.
    """
    if not token:
        raise DelegationError(ErrorKind.INVALID_INPUT, "Token not provided.")
    current = now or datetime.now(UTC)

    user = db.query(User).filter(User.access_token == token).first()
    if user is None:
        raise DelegationError(ErrorKind.INVALID_TOKEN, "Token invalid or not registered.")

    if user.token_expiration is not None and _as_utc(user.token_expiration) < current:
        raise DelegationError(
            ErrorKind.EXPIRED, "Token expired according to database records."
        )

    try:
        claims = verify_token(token, now=current)
    except TokenVerificationError as e:
        raise DelegationError(e.kind, f"Token invalid or expired: {e.message}") from e

    return VerifyAccessResponse(
        user=TokenOwner(id=user.id, username=user.username, email=user.email, role=user.role),
        permissions=list(claims.get("permissions") or []),
        expires_at=_as_utc(user.token_expiration) if user.token_expiration else None,
    )


def revoke(db: Session, issuer: CurrentUser, user_id: int | None) -> None:
    """Clear the stored token columns. Idempotent; an unknown user id is not an error."""
    _require_admin(issuer, "revoke access tokens")
    if not user_id:
        raise DelegationError(ErrorKind.INVALID_INPUT, "User id is required.")

    db.query(User).filter(User.id == user_id).update(
        {User.access_token: None, User.token_expiration: None},
        synchronize_session=False,
    )
    db.commit()
    logger.info(
        "[%s] Admin %s revoked access token for user %s",
        datetime.now(UTC).isoformat(),
        issuer.id,
        user_id,
    )


def catalog(db: Session, issuer: CurrentUser) -> Sequence[Permission]:
    _require_admin(issuer, "list all permissions")
    return list_permissions(db)
