"""Database Session Manager - tests for transaction boundaries and lifecycle.

Tests cover:
    - Normal exit commits, any exception rolls back
    - Non-SQLAlchemy exceptions pass through unchanged
    - Raw SQLAlchemy errors escaping a transaction become DatabaseError
    - health_check reflects connectivity
    - init_db / dispose_db manage the process-wide manager
"""

import pytest
from sqlalchemy import func, select, text

from app.core.errors import DatabaseError
from app.infrastructure import database
from app.models.user import User


async def _count_users(db) -> int:
    async with db.transaction() as s:
        return (await s.execute(select(func.count()).select_from(User))).scalar_one()


async def test_transaction_commits_on_success(db):
    async with db.transaction() as s:
        s.add(User(username="alice"))
    assert await _count_users(db) == 1


async def test_transaction_rolls_back_and_reraises(db):
    class Boom(Exception):
        pass

    with pytest.raises(Boom):
        async with db.transaction() as s:
            s.add(User(username="alice"))
            await s.flush()
            raise Boom()
    assert await _count_users(db) == 0


async def test_raw_sqlalchemy_error_is_mapped(db):
    with pytest.raises(DatabaseError) as exc_info:
        async with db.transaction() as s:
            await s.execute(text("SELECT * FROM no_such_table"))
    assert exc_info.value.__cause__ is not None


async def test_integrity_error_at_flush_is_mapped(db):
    with pytest.raises(DatabaseError) as exc_info:
        async with db.transaction() as s:
            s.add(User(username="alice"))
            s.add(User(username="alice"))
    assert exc_info.value.operation == "commit"
    assert await _count_users(db) == 0


async def test_health_check_ok(db):
    assert await db.health_check() is True


async def test_health_check_fails_on_bad_database():
    manager = database.DatabaseSessionManager(
        "sqlite+aiosqlite:////nonexistent-dir/chat.db",
    )
    assert await manager.health_check() is False
    await manager.dispose()


async def test_init_and_dispose_db():
    manager = database.init_db("sqlite+aiosqlite:///:memory:")
    assert database.db_manager is manager
    await database.dispose_db()
    assert database.db_manager is None
    await database.dispose_db()
