"""User ORM - persists a chat participant.

Invariants:
    - username is non-nullable and unique among live rows; a soft-deleted
      user releases its name
    - loggedInUntil defaults to the Unix epoch, i.e. "never logged in"
    - deletedAt is NULL unless the user is soft-deleted; reads filter on it
    - Column names match the existing camelCase database
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """User row - the author side of every message."""
    __tablename__ = "users"
    __table_args__ = (
        Index(
            "users_username_live_key", "username", unique=True,
            postgresql_where=text('"deletedAt" IS NULL'),
            sqlite_where=text('"deletedAt" IS NULL'),
        ),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    logged_in_until: Mapped[datetime] = mapped_column(
        "loggedInUntil", DateTime(timezone=True),
        nullable=False, default=EPOCH,
    )
    created_at: Mapped[datetime] = mapped_column(
        "createdAt", DateTime(timezone=True),
        nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        "updatedAt", DateTime(timezone=True),
        nullable=False, default=_utcnow, onupdate=_utcnow,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        "deletedAt", DateTime(timezone=True), nullable=True,
    )
