"""Application configuration using Pydantic Settings.

Reads configuration from environment variables with sensible defaults.
Secrets (database password) should be provided via environment variables.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Application
    # =========================================================================
    environment: Literal["prod", "staging", "dev"] = Field(
        default="dev",
        description="Environment name",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Deadline for the database work of a single request",
    )

    # =========================================================================
    # Database
    # =========================================================================
    db_user: str = Field(
        default="dairycart",
        description="Database user",
    )
    db_password: str = Field(
        default="",
        description="Database password",
    )
    db_name: str = Field(
        default="dairycart",
        description="Database name",
    )
    db_host: str = Field(
        default="localhost",
        description="Database host",
    )
    db_port: int = Field(
        default=5432,
        description="Database port",
    )
    db_pool_size: int = Field(
        default=5,
        description="Database connection pool size",
    )
    db_pool_max_overflow: int = Field(
        default=10,
        description="Max overflow connections beyond pool size",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        """Build the asyncpg database URL."""
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    # =========================================================================
    # Listing / pagination
    # =========================================================================
    default_page_limit: int = Field(
        default=25,
        ge=1,
        description="Page size used when no limit is requested",
    )
    max_page_limit: int = Field(
        default=50,
        ge=1,
        description="Requested page sizes above this are clamped to it",
    )

    # =========================================================================
    # Products
    # =========================================================================
    numeric_precision: int = Field(
        default=2,
        ge=0,
        description="Decimal places kept for prices and dimensions",
    )
    sku_pattern: str = Field(
        default=r"^[a-zA-Z\-_]+$",
        description="Regular expression every product SKU must match",
    )

    # =========================================================================
    # Users
    # =========================================================================
    password_min_length: int = Field(
        default=64,
        ge=1,
        description="Minimum accepted password length",
    )
    salt_size: int = Field(
        default=128,
        ge=16,
        description="Size in bytes of the random per-user salt",
    )
    bcrypt_rounds: int = Field(
        default=13,
        ge=4,
        le=31,
        description="bcrypt cost factor",
    )

    # =========================================================================
    # Logging
    # =========================================================================
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=True,
        description="Output logs as JSON",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Singleton instance for convenience
settings = get_settings()
