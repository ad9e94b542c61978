"""Application settings and configuration.

This module defines all configuration options for the Lions Forum application.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Lions Forum", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./forum.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Session cookie
    session_cookie_name: str = Field(default="session_id", alias="SESSION_COOKIE_NAME")
    session_ttl_days: int = Field(default=30, alias="SESSION_TTL_DAYS")
    # Set when the site is served over HTTPS
    session_cookie_secure: bool = Field(default=False, alias="SESSION_COOKIE_SECURE")

    # Password hashing work factor (bcrypt log rounds, 4-31)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31, alias="BCRYPT_ROUNDS")

    # Categories created at bootstrap when the table is empty
    default_categories: list[str] = Field(
        default=["General", "Fiction", "Poetry", "Non-fiction", "Reviews"],
        alias="DEFAULT_CATEGORIES",
    )

    # Listing sizes
    feed_limit: int = Field(default=20, alias="FEED_LIMIT")
    category_limit: int = Field(default=50, alias="CATEGORY_LIMIT")
    search_limit: int = Field(default=50, alias="SEARCH_LIMIT")
    popular_limit: int = Field(default=6, alias="POPULAR_LIMIT")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling such as Alembic."""
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url


settings = Settings()
