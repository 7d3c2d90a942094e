"""
Auth service: registration, login and profile updates.

Each call is a single synchronous pipeline over the repository, the
password hasher and the token codec. Outcomes are returned as ``Result``
values so the HTTP layer can map them by ``ErrorKind``.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict

from .auth import PasswordHasher, TokenCodec
from .errors import ErrorKind, Result
from .models import UserProfile
from .repository import AccountRepository, DuplicateAccountError

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("bio", "country", "state", "city", "avatar_url")


@dataclass(frozen=True)
class AuthResult:
    account_id: str
    token: str


class AuthService:
    def __init__(self, repository: AccountRepository, hasher: PasswordHasher, codec: TokenCodec):
        self.repository = repository
        self.hasher = hasher
        self.codec = codec

    def register_account(self, name: str, username: str, email: str, password: str) -> Result[AuthResult]:
        # Fast path only; the unique indexes decide under concurrency
        if self.repository.find_by_email_or_username(email, username) is not None:
            return Result.fail(ErrorKind.DUPLICATE_ACCOUNT)

        password_hash = self.hasher.hash(password)

        try:
            account = self.repository.create_account_with_profile(
                name=name,
                username=username,
                email=email,
                password_hash=password_hash,
            )
        except DuplicateAccountError:
            return Result.fail(ErrorKind.DUPLICATE_ACCOUNT)

        token = self.codec.issue(account.id, account.email)
        logger.info("Registered account: account_id=%s username=%s", account.id, account.username)
        return Result.ok(AuthResult(account_id=account.id, token=token))

    def login(self, email: str, password: str) -> Result[AuthResult]:
        """
        Verify credentials and issue a token.

        An unknown email and a wrong password produce the same
        ``INVALID_CREDENTIALS`` error.
        """
        account = self.repository.find_by_email(email)
        if account is None or not self.hasher.verify(password, account.password):
            return Result.fail(ErrorKind.INVALID_CREDENTIALS)

        token = self.codec.issue(account.id, account.email)
        return Result.ok(AuthResult(account_id=account.id, token=token))

    def get_profile(self, account_id: str) -> Result[UserProfile]:
        profile = self.repository.get_profile_by_account_id(account_id)
        if profile is None:
            return Result.fail(ErrorKind.PROFILE_NOT_FOUND)
        return Result.ok(profile)

    def update_profile(self, account_id: str, fields: Dict[str, Any]) -> Result[UserProfile]:
        """
        Apply a partial profile update.

        Only keys present in ``fields`` are written; an explicit ``None``
        clears the field. Keys outside the profile fields are ignored.
        """
        profile = self.repository.get_profile_by_account_id(account_id)
        if profile is None:
            logger.warning("Profile missing for authenticated account_id=%s", account_id)
            return Result.fail(ErrorKind.PROFILE_NOT_FOUND)

        for name in PROFILE_FIELDS:
            if name in fields:
                value = fields[name]
                setattr(profile, name, "" if value is None else str(value))

        profile = self.repository.save_profile(profile)
        return Result.ok(profile)
