"""Application configuration from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment (and .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "ModeFit API"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # API
    api_v1_prefix: str = "/api/v1"

    # Database: local SQLite file by default; set DATABASE_URL=postgresql+asyncpg://... for Postgres
    database_url: str = "sqlite+aiosqlite:///./modefit.db"
    database_pool_size: int = 5
    database_max_overflow: int = 10
    # Dev convenience; use Alembic in production
    create_tables_on_startup: bool = True

    # CORS: comma-separated list of allowed origins in production
    cors_origins: str = ""

    # State blob
    storage_key: str = "fitfocus_data_v4"
    retention_days: int = 365
    default_tdee: int = 1850

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def sync_database_url(self) -> str:
        """Synchronous URL for Alembic and tooling."""
        return (
            self.database_url.replace("+aiosqlite", "")
            .replace("+asyncpg", "+psycopg2")
        )


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
