"""Password hashing and the JWT token codec (sign / verify) for authentication."""

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import settings
from app.core.errors import ErrorKind, ServiceError
from app.models.user import User

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 50
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

REQUIRED_CLAIMS = ["sub", "exp", "iat"]


class TokenVerificationError(ServiceError):
    """Raised when a token fails verification; kind is INVALID_SIGNATURE or EXPIRED."""


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def sign_token(
    claims: dict[str, Any],
    ttl: timedelta,
    now: datetime | None = None,
) -> str:
    """Sign claims into a JWT with iat=now and exp=now+ttl."""
    issued_at = now or datetime.now(UTC)
    payload: dict[str, Any] = {
        **claims,
        "iat": issued_at,
        "exp": issued_at + ttl,
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def verify_token(token: str, now: datetime | None = None) -> dict[str, Any]:
    """
    Decode and validate a JWT; return its claims.

    Raises TokenVerificationError with kind INVALID_SIGNATURE for a bad signature
    or malformed token, and kind EXPIRED once ``now`` is past the exp claim.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
            # exp is compared below against the caller's clock
            options={"verify_exp": False, "verify_iat": False, "require": REQUIRED_CLAIMS},
        )
    except jwt.PyJWTError as e:
        raise TokenVerificationError(ErrorKind.INVALID_SIGNATURE, str(e)) from e

    exp = payload["exp"]
    if not isinstance(exp, (int, float)):
        raise TokenVerificationError(
            ErrorKind.INVALID_SIGNATURE, "Expiration Time claim (exp) must be an integer."
        )
    current = now or datetime.now(UTC)
    if exp <= current.timestamp():
        raise TokenVerificationError(ErrorKind.EXPIRED, "Signature has expired")
    return payload


def _identity_claims(user: User) -> dict[str, Any]:
    return {
        "sub": str(user.id),
        "username": user.username,
        "email": user.email,
        "role": user.role,
    }


def create_access_token(user: User, now: datetime | None = None) -> str:
    """Create a session token (identity and role) valid for JWT_EXPIRE_MINUTES."""
    return sign_token(
        _identity_claims(user),
        timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
        now=now,
    )


def create_restricted_token(
    user: User,
    permissions: Sequence[str],
    hours: int | None = None,
    now: datetime | None = None,
) -> str:
    """Create a token that also embeds an explicit, ordered permission list."""
    if hours is None:
        hours = settings.RESTRICTED_TOKEN_DEFAULT_HOURS
    claims = _identity_claims(user)
    claims["permissions"] = list(permissions)
    return sign_token(claims, timedelta(hours=hours), now=now)
