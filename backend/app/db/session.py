"""Engine & Session Factory - builds the async engine for a database URL.

Invariants:
    - PostgreSQL engines get a sized pool with pre-ping and recycling
    - SQLite engines get no pool sizing (aiosqlite does not accept it);
      in-memory SQLite shares one connection so every session sees the same data
    - Sessions never expire attributes on commit
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool


def build_engine(
    database_url: str,
    pool_size: int = 20,
    max_overflow: int = 10,
    isolation_level: str | None = None,
) -> AsyncEngine:
    """Create the async engine for the given database URL."""
    kwargs: dict[str, object] = {"echo": False}
    if isolation_level:
        kwargs["isolation_level"] = isolation_level
    if database_url.startswith("sqlite"):
        if ":memory:" in database_url or database_url.endswith("://"):
            kwargs["poolclass"] = StaticPool
            kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs.update(
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
    return create_async_engine(database_url, **kwargs)


def create_session_factory(
    engine: AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to engine."""
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
