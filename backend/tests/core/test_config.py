"""Settings - environment parsing and database URL rewriting."""

from app.config import Settings


def test_postgres_url_gets_asyncpg_driver():
    s = Settings(database_url="postgresql://u:p@host:5432/chat")
    assert s.database_url == "postgresql+asyncpg://u:p@host:5432/chat"


def test_docker_db_routes_localhost_to_postgres_service():
    s = Settings(
        database_url="postgresql://u:p@localhost:5432/chat", docker_db=True,
    )
    assert s.database_url == "postgresql+asyncpg://u:p@postgres:5432/chat"


def test_localhost_kept_outside_docker():
    s = Settings(database_url="postgresql://u:p@localhost:5432/chat")
    assert "@localhost" in s.database_url


def test_defaults(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    s = Settings(_env_file=None)
    assert s.session_hours == 24
    assert s.database_isolation_level is None
    assert s.database_url.startswith("postgresql+asyncpg://")
