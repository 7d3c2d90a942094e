from sqlalchemy import Column, String, Boolean, ForeignKey, DateTime, Index, false
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
import uuid

from .db import Base


def _utcnow():
    return datetime.now(timezone.utc)


class UserAccount(Base):
    __tablename__ = "user_accounts"
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    username = Column(String, nullable=False)
    email = Column(String, nullable=False)
    password = Column(String, nullable=False)
    is_deleted = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    profile = relationship(
        "UserProfile",
        back_populates="account",
        uselist=False,
        cascade="all, delete-orphan",
    )

    # Uniqueness only applies to accounts that are not soft-deleted
    __table_args__ = (
        Index(
            "ux_user_accounts_email_active", "email", unique=True,
            sqlite_where=is_deleted == false(), postgresql_where=is_deleted == false(),
        ),
        Index(
            "ux_user_accounts_username_active", "username", unique=True,
            sqlite_where=is_deleted == false(), postgresql_where=is_deleted == false(),
        ),
    )

    def __repr__(self):
        return f"<UserAccount(id={self.id}, username={self.username}, email={self.email})>"


class UserProfile(Base):
    __tablename__ = "user_profiles"
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_account_id = Column(
        String(36),
        ForeignKey("user_accounts.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    bio = Column(String(160), default="", nullable=False)
    country = Column(String(50), default="", nullable=False)
    state = Column(String(50), default="", nullable=False)
    city = Column(String(50), default="", nullable=False)
    avatar_url = Column(String, default="", nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    account = relationship("UserAccount", back_populates="profile")

    def to_dict(self) -> dict:
        """Serialize the public profile fields."""
        return {
            "bio": self.bio,
            "country": self.country,
            "state": self.state,
            "city": self.city,
            "avatarUrl": self.avatar_url,
        }
