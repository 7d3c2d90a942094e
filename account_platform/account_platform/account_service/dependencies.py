"""
FastAPI dependencies wiring settings, the database session and the
auth components into route handlers.

Tests replace any of these through ``app.dependency_overrides``.
"""
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from .auth import PasswordHasher, TokenClaims, TokenCodec
from .config import Settings, get_settings
from .db import get_db
from .error_handlers import unwrap, ServiceErrorException
from .errors import ErrorKind, ServiceError
from .repository import AccountRepository
from .service import AuthService


@lru_cache
def _hasher_for_rounds(rounds: int) -> PasswordHasher:
    return PasswordHasher(rounds=rounds)


def get_password_hasher(settings: Settings = Depends(get_settings)) -> PasswordHasher:
    return _hasher_for_rounds(settings.BCRYPT_ROUNDS)


def get_token_codec(settings: Settings = Depends(get_settings)) -> TokenCodec:
    return TokenCodec(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        expires_minutes=settings.JWT_EXPIRES_MINUTES,
    )


def get_auth_service(
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    codec: TokenCodec = Depends(get_token_codec),
) -> AuthService:
    return AuthService(AccountRepository(db), hasher, codec)


def get_current_account(
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
    codec: TokenCodec = Depends(get_token_codec),
) -> TokenClaims:
    """
    Require ``Authorization: Bearer <token>`` and return the verified claims.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise ServiceErrorException(ServiceError.of(ErrorKind.UNAUTHENTICATED))

    token = authorization[len("Bearer "):].strip()
    if not token:
        raise ServiceErrorException(ServiceError.of(ErrorKind.UNAUTHENTICATED))

    return unwrap(codec.verify(token))
