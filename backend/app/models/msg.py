"""Msg ORM - persists one chat message.

Invariants:
    - Always belongs to exactly one User (UserId FK, non-nullable)
    - msg text is non-nullable
    - Rows are never hard-deleted; deletedAt marks soft deletion
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Msg(Base):
    """Message row."""
    __tablename__ = "msgs"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    msg: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[int] = mapped_column(
        "UserId", Integer, ForeignKey("users.id"), nullable=False, index=True,
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
