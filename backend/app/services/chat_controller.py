"""Chat Controller - the only entry point for business operations.

Invariants:
    - Each public operation runs in exactly one transaction: every step commits
      or none do
    - Inputs are validated before the transaction opens
    - Errors propagate to the caller unchanged after rollback
    - A transaction session never escapes the method that opened it
    - Business transactions are opened here and nowhere else

Design Decisions:
    - Login auto-registers unseen usernames (no separate signup step)
    - A login that loses the first-insert race (UsernameTakenError) is retried
      once in a fresh transaction, where the lookup finds the winner's row
    - Clock is injectable so session expiry is testable without sleeping
    - login re-reads the user after update_user so the returned DTO carries the
      stored updatedAt
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from app.core import validators
from app.core.dto import MessageDTO, UserDTO
from app.core.errors import UsernameTakenError
from app.infrastructure.chat_dao import ChatDAO
from app.infrastructure.database import DatabaseSessionManager

logger = logging.getLogger(__name__)

DEFAULT_SESSION_HOURS = 24


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ChatController:
    """Orchestrates users and messages; no other class calls the DAO."""

    def __init__(
        self,
        db: DatabaseSessionManager,
        dao: ChatDAO | None = None,
        session_hours: int = DEFAULT_SESSION_HOURS,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._db = db
        self._dao = dao or ChatDAO(db)
        self._session_length = timedelta(hours=session_hours)
        self._clock = clock

    @classmethod
    async def create(
        cls, db: DatabaseSessionManager, **kwargs,
    ) -> "ChatController":
        """Build a controller once the store has answered a trivial query."""
        controller = cls(db, **kwargs)
        await controller._dao.verify_connection()
        return controller

    async def login(self, username: str) -> UserDTO:
        """Log in, creating the user on first sight, and extend the session.

        There is no password: claiming a username is the whole login. Returns
        the user with logged_in_until moved to now + session length.
        """
        validators.is_non_zero_length_string(username, "username")
        validators.is_alnum_string(username, "username")
        try:
            return await self._login_once(username)
        except UsernameTakenError:
            logger.info(
                f"Concurrent first login for {username}, retrying",
                extra={"operation": "login"},
            )
            return await self._login_once(username)

    async def is_logged_in(self, username: str) -> UserDTO | None:
        """Return the user if their session is still running, else None."""
        validators.is_non_zero_length_string(username, "username")
        validators.is_alnum_string(username, "username")
        async with self._db.transaction() as tx:
            users = await self._dao.find_user_by_username(username, tx)
            if not users:
                return None
            user = users[0]
            if not self._is_valid_date(user.logged_in_until):
                return None
            if user.logged_in_until < self._clock():
                return None
            return user

    async def add_msg(self, msg: str, author: UserDTO) -> MessageDTO:
        validators.is_non_zero_length_string(msg, "msg")
        validators.is_instance_of(author, UserDTO, "author", "UserDTO")
        async with self._db.transaction() as tx:
            return await self._dao.create_msg(msg, author, tx)

    async def find_msg(self, msg_id: int) -> MessageDTO | None:
        validators.is_positive_integer(msg_id, "msgId")
        async with self._db.transaction() as tx:
            return await self._dao.find_msg_by_id(msg_id, tx)

    async def find_user(self, user_id: int) -> UserDTO | None:
        validators.is_positive_integer(user_id, "id")
        async with self._db.transaction() as tx:
            return await self._dao.find_user_by_id(user_id, tx)

    async def find_all_msgs(self) -> list[MessageDTO]:
        async with self._db.transaction() as tx:
            return await self._dao.find_all_msgs(tx)

    async def delete_msg(self, msg_id: int) -> None:
        validators.is_positive_integer(msg_id, "msgId")
        async with self._db.transaction() as tx:
            await self._dao.delete_msg(msg_id, tx)

    # --- Helpers -------------------------------------------------

    async def _login_once(self, username: str) -> UserDTO:
        async with self._db.transaction() as tx:
            return await self._extend_session(username, tx)

    async def _extend_session(self, username: str, tx: AsyncSession) -> UserDTO:
        users = await self._dao.find_user_by_username(username, tx)
        user = users[0] if users else await self._dao.create_user(username, tx)
        user.logged_in_until = self._clock() + self._session_length
        await self._dao.update_user(user, tx)
        logger.info(
            f"User {username} logged in",
            extra={"operation": "login", "user_id": user.id},
        )
        return await self._dao.find_user_by_id(user.id, tx)

    @staticmethod
    def _is_valid_date(value: object) -> bool:
        return isinstance(value, datetime)
