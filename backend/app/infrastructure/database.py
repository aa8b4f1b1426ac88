"""Database Session Manager - async connection pool, atomic transactions, health checks.

Invariants:
    - transaction() yields a session inside one flat transaction: commit on normal
      exit, rollback on any exception (no partial commits leak)
    - Exceptions that are not SQLAlchemy errors propagate unchanged after rollback
    - Raw SQLAlchemy exceptions escaping a transaction are mapped to DatabaseError
    - A session never outlives the transaction() block that opened it

Design Decisions:
    - Process-wide db_manager with explicit init_db() / dispose_db() lifecycle,
      driven by the FastAPI lifespan and injected into the controller
    - expire_on_commit=False so DTO construction never triggers lazy loads
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import DatabaseError, ErrorContext
from app.db.base import Base
from app.db.session import build_engine, create_session_factory
import app.models  # noqa: F401  (populates Base.metadata)

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Owns the engine and hands out transactional sessions."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 20,
        max_overflow: int = 10,
        isolation_level: str | None = None,
    ):
        self.engine = build_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            isolation_level=isolation_level,
        )
        self._session_factory = create_session_factory(self.engine)

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session bound to one transaction, rolled back on error."""
        async with self._session_factory() as session:
            try:
                async with session.begin():
                    yield session
            except IntegrityError as e:
                logger.warning(f"DB integrity error, rolled back: {e}")
                raise DatabaseError(
                    "Integrity constraint violated", "commit",
                    ErrorContext(debug_info={"cause": type(e).__name__}),
                ) from e
            except OperationalError as e:
                logger.warning(f"DB operational error, rolled back: {e}")
                raise DatabaseError(
                    "Connection or operational error", "execute",
                ) from e
            except DBAPIError as e:
                logger.warning(f"DB driver error, rolled back: {e}")
                raise DatabaseError("Database driver error", "query") from e
            except SQLAlchemyError as e:
                logger.warning(f"SQLAlchemy error, rolled back: {e}")
                raise DatabaseError("Database operation failed", "unknown") from e
            except Exception as e:
                logger.debug(f"Transaction rolled back: {type(e).__name__}")
                raise

    async def create_tables(self) -> None:
        """Create missing tables (development convenience; migrations own prod)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured")

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.transaction() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Initialized on startup, disposed on shutdown
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def dispose_db() -> None:
    global db_manager
    if db_manager is not None:
        await db_manager.dispose()
        db_manager = None
