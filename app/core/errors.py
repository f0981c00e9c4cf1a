"""Error kinds shared by services and the HTTP layer, and their status mapping."""

from enum import Enum
from typing import Any

from fastapi import HTTPException, status
from pydantic.alias_generators import to_camel


class ErrorKind(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    INVALID_TOKEN = "invalid_token"
    INVALID_SIGNATURE = "invalid_signature"
    EXPIRED = "expired"
    FORBIDDEN = "forbidden"
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"


# Bad or expired tokens are "forbidden" once presented; only a missing token is 401.
STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_TOKEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.INVALID_SIGNATURE: status.HTTP_403_FORBIDDEN,
    ErrorKind.EXPIRED: status.HTTP_403_FORBIDDEN,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


class ServiceError(Exception):
    """Raised by services for expected, client-visible failures."""

    def __init__(self, kind: ErrorKind, message: str, **extra: Any) -> None:
        self.kind = kind
        self.message = message
        self.extra = extra
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


def to_http_exception(exc: ServiceError) -> HTTPException:
    """Translate a ServiceError into an HTTPException with the mapped status."""
    detail: Any = exc.message
    if exc.extra:
        detail = {"message": exc.message, **{to_camel(k): v for k, v in exc.extra.items()}}
    headers = None
    if exc.kind is ErrorKind.UNAUTHENTICATED:
        headers = {"WWW-Authenticate": "Bearer"}
    return HTTPException(status_code=exc.status_code, detail=detail, headers=headers)
