"""
Error kinds and value-or-error results passed between service layers.

The HTTP boundary maps an ``ErrorKind`` to a status code through
``STATUS_BY_KIND`` instead of comparing exception messages.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    VALIDATION_ERROR = "validation_error"
    DUPLICATE_ACCOUNT = "duplicate_account"
    INVALID_CREDENTIALS = "invalid_credentials"
    PROFILE_NOT_FOUND = "profile_not_found"
    INVALID_OR_EXPIRED_TOKEN = "invalid_or_expired_token"
    UNAUTHENTICATED = "unauthenticated"
    INTERNAL_ERROR = "internal_error"


STATUS_BY_KIND = {
    ErrorKind.VALIDATION_ERROR: 400,
    ErrorKind.DUPLICATE_ACCOUNT: 409,
    ErrorKind.INVALID_CREDENTIALS: 401,
    ErrorKind.PROFILE_NOT_FOUND: 404,
    ErrorKind.INVALID_OR_EXPIRED_TOKEN: 401,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.INTERNAL_ERROR: 500,
}

DEFAULT_MESSAGES = {
    ErrorKind.VALIDATION_ERROR: "Validation failed.",
    ErrorKind.DUPLICATE_ACCOUNT: "Username or email already exists.",
    ErrorKind.INVALID_CREDENTIALS: "Invalid email or password.",
    ErrorKind.PROFILE_NOT_FOUND: "Profile not found.",
    ErrorKind.INVALID_OR_EXPIRED_TOKEN: "Invalid or expired token.",
    ErrorKind.UNAUTHENTICATED: "Authentication required.",
    ErrorKind.INTERNAL_ERROR: "Internal server error.",
}


@dataclass(frozen=True)
class ServiceError:
    kind: ErrorKind
    message: str
    details: List[dict] = field(default_factory=list)

    @classmethod
    def of(cls, kind: ErrorKind, details: Optional[List[dict]] = None) -> "ServiceError":
        return cls(kind=kind, message=DEFAULT_MESSAGES[kind], details=details or [])

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or a ``ServiceError``, never both."""

    value: Optional[T] = None
    error: Optional[ServiceError] = None

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, kind: ErrorKind, details: Optional[List[dict]] = None) -> "Result[T]":
        return cls(error=ServiceError.of(kind, details))

    @property
    def is_ok(self) -> bool:
        return self.error is None
