"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - Database credentials come from environment variables (never hardcoded beyond
      the docker-compose default)
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env support
    - Defaults provided for all settings: works out of the box with docker-compose
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "postgresql+asyncpg://chat:chat@db:5432/chat"
    docker_db: bool = False

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql://; asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    @model_validator(mode="after")
    def route_localhost_to_compose_service(self) -> "Settings":
        # Inside docker-compose the database answers at the `postgres` service name
        if self.docker_db and "@localhost" in self.database_url:
            self.database_url = self.database_url.replace("@localhost", "@postgres")
        return self

    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_isolation_level: str | None = None
    database_create_tables: bool = True

    # Sessions
    session_hours: int = 24

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
