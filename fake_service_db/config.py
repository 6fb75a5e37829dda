"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Variable names match the other fake services: LISTEN_ADDR, NAME, DATABASE_*
    - get_settings() is cached (lru_cache) and used only by the process entry point;
      the app factory receives Settings explicitly
    - The database password never appears in log output

Design Decisions:
    - DATABASE_URL, when set, wins over the DATABASE_HOST/PORT/USER/PASSWORD/NAME parts
    - Defaults provided for all non-secret settings
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Service
    listen_addr: str = "0.0.0.0:9090"
    name: str = "Service"

    # Database
    database_host: str = "127.0.0.1"
    database_port: int = 5432
    database_user: str = ""
    database_password: str = ""
    database_name: str = ""
    database_url: str | None = None
    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Seconds; 0 waits forever
    query_timeout_seconds: float = 30.0

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str | None) -> str | None:
        """Plain postgresql:// URLs need the asyncpg driver name."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    @property
    def listen_host(self) -> str:
        host, _, _ = self.listen_addr.rpartition(":")
        return host or "0.0.0.0"

    @property
    def listen_port(self) -> int:
        _, _, port = self.listen_addr.rpartition(":")
        return int(port)

    def sqlalchemy_url(self) -> str | URL:
        """Connection URL for the store engine."""
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+asyncpg",
            username=self.database_user or None,
            password=self.database_password or None,
            host=self.database_host,
            port=self.database_port,
            database=self.database_name or None,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
