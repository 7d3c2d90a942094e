"""
Account store: SQLAlchemy queries for accounts and profiles.
"""
import logging
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .models import UserAccount, UserProfile

logger = logging.getLogger(__name__)


class DuplicateAccountError(Exception):
    """Raised when the store rejects an account on a uniqueness constraint."""


class AccountRepository:
    def __init__(self, db: Session):
        self.db = db

    def _active_accounts(self):
        return self.db.query(UserAccount).filter(UserAccount.is_deleted.is_(False))

    def find_by_email_or_username(self, email: str, username: str) -> Optional[UserAccount]:
        return self._active_accounts().filter(
            or_(UserAccount.email == email, UserAccount.username == username)
        ).first()

    def find_by_email(self, email: str) -> Optional[UserAccount]:
        return self._active_accounts().filter(UserAccount.email == email).first()

    def create_account_with_profile(
        self, name: str, username: str, email: str, password_hash: str
    ) -> UserAccount:
        """
        Insert an account and its empty profile in a single commit.

        Raises:
            DuplicateAccountError: if the email or username index rejects the row
        """
        account = UserAccount(
            name=name,
            username=username,
            email=email,
            password=password_hash,
            is_deleted=False,
        )
        account.profile = UserProfile(bio="", country="", state="", city="", avatar_url="")
        self.db.add(account)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info("Account insert rejected by unique index: %s", e.orig)
            raise DuplicateAccountError(email) from e
        self.db.refresh(account)
        return account

    def get_profile_by_account_id(self, account_id: str) -> Optional[UserProfile]:
        return (
            self.db.query(UserProfile)
            .filter(UserProfile.user_account_id == account_id)
            .first()
        )

    def save_profile(self, profile: UserProfile) -> UserProfile:
        self.db.add(profile)
        self.db.commit()
        self.db.refresh(profile)
        return profile
