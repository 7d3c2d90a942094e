from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext

from .errors import ErrorKind, Result

DEFAULT_BCRYPT_ROUNDS = 10
DEFAULT_ALGORITHM = "HS256"
DEFAULT_EXPIRES_MINUTES = 30


class PasswordHasher:
    """bcrypt password hashing with a fixed cost factor."""

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self.rounds = rounds
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hashed_password: str) -> bool:
        # passlib raises on digests it cannot identify or parse
        try:
            return self._context.verify(password, hashed_password)
        except (ValueError, TypeError):
            return False


@dataclass(frozen=True)
class TokenClaims:
    subject_id: str
    email: str


class TokenCodec:
    """Issues and verifies signed, time-limited bearer tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = DEFAULT_ALGORITHM,
        expires_minutes: int = DEFAULT_EXPIRES_MINUTES,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes

    def issue(self, subject_id: str, email: str, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(subject_id),
            "email": email,
            "iat": issued_at,
            "exp": issued_at + timedelta(minutes=self.expires_minutes),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Result[TokenClaims]:
        """
        Check signature and expiry and return the token's claims.

        Every failure (bad signature, malformed token, missing claim,
        expired) yields the same ``INVALID_OR_EXPIRED_TOKEN`` error.
        """
        try:
            data = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.InvalidTokenError:
            return Result.fail(ErrorKind.INVALID_OR_EXPIRED_TOKEN)

        email = data.get("email")
        if not isinstance(email, str) or not email:
            return Result.fail(ErrorKind.INVALID_OR_EXPIRED_TOKEN)

        return Result.ok(TokenClaims(subject_id=data["sub"], email=email))
