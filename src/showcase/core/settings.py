"""Application settings and configuration.

This module defines all configuration options for the Showcase service.
Settings are loaded from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Showcase", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    public_base_url: str = Field(default="http://localhost:5173", alias="PUBLIC_BASE_URL")

    # Security and authentication
    secret_key: str = Field(default="change-me-in-production", alias="SECRET_KEY")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./showcase.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Client-scoped duplicate markers ("already reviewed", "already helpful")
    client_store_backend: Literal["memory", "redis"] = Field(
        default="memory",
        alias="CLIENT_STORE_BACKEND",
    )
    redis_url: str = Field(default="redis://localhost:6379", alias="REDIS_URL")
    # 0 keeps markers forever, mirroring browser local storage.
    client_store_ttl_seconds: int = Field(default=0, alias="CLIENT_STORE_TTL_SECONDS")

    # JWT settings for project owners; tokens are minted by the account service
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Review submission rules
    rating_min: int = Field(default=1, alias="RATING_MIN")
    rating_max: int = Field(default=10, alias="RATING_MAX")
    review_text_min_length: int = Field(default=50, alias="REVIEW_TEXT_MIN_LENGTH")
    review_text_max_length: int = Field(default=1000, alias="REVIEW_TEXT_MAX_LENGTH")

    # Project submission rules
    project_title_max_length: int = Field(default=100, alias="PROJECT_TITLE_MAX_LENGTH")
    project_description_max_length: int = Field(
        default=500,
        alias="PROJECT_DESCRIPTION_MAX_LENGTH",
    )
    project_tech_stack_max: int = Field(default=5, alias="PROJECT_TECH_STACK_MAX")
    share_code_length: int = Field(default=8, alias="SHARE_CODE_LENGTH")

    # Query windows
    review_fetch_limit: int = Field(default=50, alias="REVIEW_FETCH_LIMIT")
    leaderboard_default_limit: int = Field(default=20, alias="LEADERBOARD_DEFAULT_LIMIT")
    leaderboard_podium_size: int = Field(default=3, alias="LEADERBOARD_PODIUM_SIZE")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides.

        Returns:
            The active database URL (test database if in testing mode, otherwise production)
        """
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    def share_link(self, share_code: str) -> str:
        """Return the public review URL carrying ``share_code``."""
        return f"{self.public_base_url.rstrip('/')}/review/{share_code}"


settings = Settings()
