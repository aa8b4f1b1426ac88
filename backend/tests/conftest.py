"""Root conftest - shared test configuration and database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database with both tables created
    - Settings never point at a real database during tests
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest

from app.infrastructure.chat_dao import ChatDAO
from app.infrastructure.database import DatabaseSessionManager


@pytest.fixture
async def db():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    await manager.create_tables()
    yield manager
    await manager.dispose()


@pytest.fixture
def dao(db):
    return ChatDAO(db)
