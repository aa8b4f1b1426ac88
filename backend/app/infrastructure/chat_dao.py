"""Chat DAO - every read and write against the users and msgs tables.

Invariants:
    - No database code exists outside this module; no other module sees a row
    - Inputs are validated before any store access; InvalidParameterError
      propagates unwrapped
    - Every SQLAlchemyError is wrapped in DatabaseError carrying the operation
      name and the offending parameters, chained to the original cause
    - Reads never return soft-deleted rows (deletedAt IS NULL filter)
    - Not-found is None (single lookups) or [] (collections), never an error
    - Updates and soft deletes that match zero rows are accepted silently

Design Decisions:
    - Explicit transaction handle: every method takes an optional `tx` session;
      without one, the call runs in its own short transaction on the shared engine
    - create_msg builds the returned MessageDTO from the caller's author DTO
      instead of re-reading the user row
    - find_user_by_id reloads rows already in the session, so a read after
      update_user inside one transaction sees the new updatedAt
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from sqlalchemy import select, text, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import validators
from app.core.dto import MessageDTO, UserDTO
from app.core.errors import DatabaseError, ErrorContext, UsernameTakenError
from app.infrastructure.database import DatabaseSessionManager
from app.models.msg import Msg
from app.models.user import EPOCH, User

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime | None) -> datetime | None:
    """SQLite hands back naive datetimes; everything stored is UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _store_error(operation: str, message: str, /, **info: object) -> DatabaseError:
    return DatabaseError(
        message, operation,
        ErrorContext(debug_info={"ChatDAO": operation, **info}),
    )


class ChatDAO:
    """Maps users and msgs rows to DTOs. Holds no state besides the engine."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    @asynccontextmanager
    async def _runner(
        self, tx: AsyncSession | None,
    ) -> AsyncGenerator[AsyncSession, None]:
        if tx is not None:
            yield tx
        else:
            async with self._db.transaction() as session:
                yield session

    async def verify_connection(self, tx: AsyncSession | None = None) -> None:
        """Run a trivial query; raises DatabaseError if the store is unreachable."""
        async with self._runner(tx) as session:
            try:
                await session.execute(text("SELECT 1"))
            except SQLAlchemyError as e:
                raise _store_error(
                    "verify_connection", "could not connect to database",
                ) from e

    # --- Users ---------------------------------------------------

    async def find_user_by_username(
        self, username: str, tx: AsyncSession | None = None,
    ) -> list[UserDTO]:
        validators.is_non_zero_length_string(username, "username")
        validators.is_alnum_string(username, "username")
        async with self._runner(tx) as session:
            try:
                result = await session.execute(
                    select(User).where(
                        User.username == username,
                        User.deleted_at.is_(None),
                    ),
                )
                rows = result.scalars().all()
            except SQLAlchemyError as e:
                raise _store_error(
                    "find_user_by_username",
                    f"could not search for user {username}", username=username,
                ) from e
        return [self._to_user_dto(row) for row in rows]

    async def find_user_by_id(
        self, user_id: int, tx: AsyncSession | None = None,
    ) -> UserDTO | None:
        validators.is_positive_integer(user_id, "id")
        async with self._runner(tx) as session:
            try:
                result = await session.execute(
                    select(User)
                    .where(User.id == user_id, User.deleted_at.is_(None))
                    .execution_options(populate_existing=True),
                )
                row = result.scalar_one_or_none()
            except SQLAlchemyError as e:
                raise _store_error(
                    "find_user_by_id",
                    f"could not search for user {user_id}", id=user_id,
                ) from e
        return self._to_user_dto(row) if row else None

    async def create_user(
        self, username: str, tx: AsyncSession | None = None,
    ) -> UserDTO:
        validators.is_non_zero_length_string(username, "username")
        validators.is_alnum_string(username, "username")
        async with self._runner(tx) as session:
            try:
                row = User(username=username)
                session.add(row)
                await session.flush()
                await session.refresh(row)
            except IntegrityError as e:
                raise UsernameTakenError(
                    username,
                    ErrorContext(debug_info={
                        "ChatDAO": "create_user", "username": username,
                    }),
                ) from e
            except SQLAlchemyError as e:
                raise _store_error(
                    "create_user",
                    f"could not create user {username}", username=username,
                ) from e
            user = self._to_user_dto(row)
        logger.info(
            f"Created user {username}",
            extra={"operation": "create_user", "user_id": user.id},
        )
        return user

    async def update_user(
        self, user: UserDTO, tx: AsyncSession | None = None,
    ) -> None:
        """Persist username and logged_in_until; bumps updatedAt."""
        validators.is_instance_of(user, UserDTO, "user", "UserDTO")
        async with self._runner(tx) as session:
            try:
                result = await session.execute(
                    update(User)
                    .where(User.id == user.id)
                    .values(
                        username=user.username,
                        logged_in_until=user.logged_in_until,
                        updated_at=_utcnow(),
                    )
                    .execution_options(synchronize_session=False),
                )
                matched = result.rowcount
            except SQLAlchemyError as e:
                raise _store_error(
                    "update_user",
                    f"could not update user {user.username}",
                    username=user.username, id=user.id,
                ) from e
        if matched == 0:
            logger.debug(
                f"update_user matched no row for id {user.id}",
                extra={"operation": "update_user", "user_id": user.id},
            )

    # --- Messages ------------------------------------------------

    async def create_msg(
        self, msg: str, author: UserDTO, tx: AsyncSession | None = None,
    ) -> MessageDTO:
        validators.is_non_zero_length_string(msg, "msg")
        validators.is_instance_of(author, UserDTO, "author", "UserDTO")
        async with self._runner(tx) as session:
            try:
                row = Msg(msg=msg, user_id=author.id)
                session.add(row)
                await session.flush()
                await session.refresh(row)
            except SQLAlchemyError as e:
                raise _store_error(
                    "create_msg",
                    f"could not create message by {author.username}",
                    message=msg, author_id=author.id,
                ) from e
            created = self._to_msg_dto(row, author)
        logger.debug(
            f"Created msg {created.id}",
            extra={"operation": "create_msg", "msg_id": created.id, "user_id": author.id},
        )
        return created

    async def find_msg_by_id(
        self, msg_id: int, tx: AsyncSession | None = None,
    ) -> MessageDTO | None:
        validators.is_positive_integer(msg_id, "msgId")
        async with self._runner(tx) as session:
            try:
                result = await session.execute(
                    select(Msg, User)
                    .join(User, Msg.user_id == User.id)
                    .where(Msg.id == msg_id, Msg.deleted_at.is_(None)),
                )
                found = result.first()
            except SQLAlchemyError as e:
                raise _store_error(
                    "find_msg_by_id",
                    f"could not search for message {msg_id}", id=msg_id,
                ) from e
        if found is None:
            return None
        msg_row, user_row = found
        return self._to_msg_dto(msg_row, self._to_user_dto(user_row))

    async def find_all_msgs(
        self, tx: AsyncSession | None = None,
    ) -> list[MessageDTO]:
        """All non-deleted messages with their authors, in id order."""
        async with self._runner(tx) as session:
            try:
                result = await session.execute(
                    select(Msg, User)
                    .join(User, Msg.user_id == User.id)
                    .where(Msg.deleted_at.is_(None))
                    .order_by(Msg.id),
                )
                rows = result.all()
            except SQLAlchemyError as e:
                raise _store_error(
                    "find_all_msgs", "could not read messages",
                ) from e
        return [
            self._to_msg_dto(msg_row, self._to_user_dto(user_row))
            for msg_row, user_row in rows
        ]

    async def delete_msg(
        self, msg_id: int, tx: AsyncSession | None = None,
    ) -> None:
        """Soft delete: sets deletedAt, the row stays in the table."""
        validators.is_positive_integer(msg_id, "msgId")
        async with self._runner(tx) as session:
            try:
                result = await session.execute(
                    update(Msg)
                    .where(Msg.id == msg_id, Msg.deleted_at.is_(None))
                    .values(deleted_at=_utcnow())
                    .execution_options(synchronize_session=False),
                )
                matched = result.rowcount
            except SQLAlchemyError as e:
                raise _store_error(
                    "delete_msg",
                    f"could not delete message {msg_id}", msg=msg_id,
                ) from e
        if matched == 0:
            logger.debug(
                f"delete_msg matched no live row for id {msg_id}",
                extra={"operation": "delete_msg", "msg_id": msg_id},
            )

    # --- Row mapping ---------------------------------------------

    @staticmethod
    def _to_user_dto(row: User) -> UserDTO:
        return UserDTO(
            row.id,
            row.username,
            _as_utc(row.logged_in_until) or EPOCH,
            _as_utc(row.created_at),
            _as_utc(row.updated_at),
            _as_utc(row.deleted_at),
        )

    @staticmethod
    def _to_msg_dto(row: Msg, author: UserDTO) -> MessageDTO:
        return MessageDTO(
            row.id,
            author,
            row.msg,
            _as_utc(row.created_at),
            _as_utc(row.updated_at),
            _as_utc(row.deleted_at),
        )
