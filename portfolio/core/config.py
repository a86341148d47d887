import logging
import os

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


def normalize_database_url(url: str) -> str:
    # The async engine needs an async driver; hosted Postgres URLs usually come as libpq style.
    if url.startswith("postgres://"):
        return "postgresql+asyncpg://" + url[len("postgres://"):]
    if url.startswith("postgresql://"):
        return "postgresql+asyncpg://" + url[len("postgresql://"):]
    return url


class Settings(BaseSettings):
    PROJECT_NAME: str = "Portfolio"
    API_PREFIX: str = "/api"
    SECRET_KEY: str = "secret"
    DATABASE_URL: str = "sqlite+aiosqlite:///./portfolio.db"
    BACKEND_CORS_ORIGINS: list[str] = ["*"]
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    ENVIRONMENT: str = "development"
    DB_AUTO_INIT_ON_STARTUP: bool | None = None

    # Dashboard owner account; the hash comes from scripts/hash_owner_password.py.
    # Login is refused while either value is empty.
    OWNER_EMAIL: str = ""
    OWNER_PASSWORD_HASH: str = ""

    ANALYTICS_DEFAULT_DAYS: int = 30
    ANALYTICS_TOP_PAGES_LIMIT: int = 10

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore"
    )

    @model_validator(mode='after')
    def check_database_url_in_production(self):
        if os.environ.get("VERCEL"):
            logger.info("Vercel environment detected. Forcing ENVIRONMENT=production.")
            self.ENVIRONMENT = "production"

        if self.ENVIRONMENT == "production" and "sqlite" in self.DATABASE_URL:
            raise ValueError(
                "Production environment detected but DATABASE_URL is missing or points at SQLite. "
                "Set DATABASE_URL to the PostgreSQL connection string."
            )

        normalized = normalize_database_url(self.DATABASE_URL)
        if normalized != self.DATABASE_URL:
            logger.info("Rewrote DATABASE_URL scheme to postgresql+asyncpg://")
            self.DATABASE_URL = normalized

        # development/test bootstrap the schema, production only checks connectivity
        if self.DB_AUTO_INIT_ON_STARTUP is None:
            self.DB_AUTO_INIT_ON_STARTUP = self.ENVIRONMENT != "production"

        return self

settings = Settings()
