"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, PostgresDsn, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "HRMS API"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    # Database (required - no default for security)
    database_url: PostgresDsn = Field(
        description="PostgreSQL connection URL. Must be set via environment variable."
    )
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Employment history
    default_salary_currency: str = Field(default="INR", min_length=3, max_length=3)
    # Open-ended history records are treated as ending this many years from today
    history_open_end_years: int = Field(default=100, ge=1)

    # Pagination
    max_page_size: int = Field(default=200, ge=1)

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings for deployment requirements."""
        if self.environment == "production" and self.debug:
            raise ValueError(
                "DEBUG mode cannot be enabled in production environment. "
                "This would expose API documentation and detailed error messages."
            )

        url = str(self.database_url)

        if not url.startswith(("postgresql://", "postgres://")):
            raise ValueError(
                "DATABASE_URL must be a PostgreSQL URL starting with 'postgresql://' or 'postgres://'"
            )

        # In production, require SSL/TLS connection (unless connecting to Docker internal network)
        is_docker_internal = "@postgres:" in url or "@localhost:" in url or "@127.0.0.1:" in url
        if self.environment == "production" and not is_docker_internal and "sslmode=" not in url:
            raise ValueError(
                "DATABASE_URL must include sslmode parameter in production "
                "(e.g., sslmode=require or sslmode=verify-full)"
            )

        return self

    @property
    def async_database_url(self) -> str:
        """Get async database URL for SQLAlchemy with asyncpg.

        Converts sslmode parameter to ssl for asyncpg compatibility:
        - sslmode=disable -> ssl=disable
        - sslmode=require -> ssl=require
        """
        url = str(self.database_url)
        url = url.replace("postgres://", "postgresql://", 1)
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        url = url.replace("sslmode=", "ssl=")
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
