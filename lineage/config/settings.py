"""
Configuration Management Module

Environment-based configuration with validation using Pydantic Settings.

All components load settings from environment variables, optionally defined
in a .env file at the working directory.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import Timeouts

ANCESTOR_STRATEGIES = ("recursive", "iterative")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All configuration is centralized here to prevent hardcoded values
    scattered throughout the codebase.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra environment variables
    )

    # =============================================================================
    # SERVICE IDENTITY
    # =============================================================================
    SERVICE_NAME: str = Field(default="location-lineage", description="Service name for logs and metrics")

    # =============================================================================
    # ENVIRONMENT
    # =============================================================================
    ENVIRONMENT: str = Field(default="development", description="Environment name")
    DEBUG: bool = Field(default=False, description="Debug mode (echoes SQL)")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(default="json", description="Logging format: json or console")

    # =============================================================================
    # DATABASE (PostgreSQL)
    # =============================================================================
    POSTGRES_HOST: str = Field(default="localhost", description="PostgreSQL host")
    POSTGRES_PORT: int = Field(default=5432, description="PostgreSQL port")
    POSTGRES_DB: str = Field(default="postgres", description="PostgreSQL database")
    POSTGRES_USER: str = Field(default="postgres", description="PostgreSQL user")
    POSTGRES_PASSWORD: str = Field(default="postgres", description="PostgreSQL password")
    POSTGRES_POOL_SIZE: int = Field(default=10, description="Connection pool size")
    POSTGRES_MAX_OVERFLOW: int = Field(default=20, description="Max pool overflow")
    POSTGRES_POOL_TIMEOUT: int = Field(default=30, description="Pool timeout (seconds)")
    POSTGRES_POOL_RECYCLE: int = Field(default=3600, description="Connection recycle time")
    DATABASE_URL_OVERRIDE: Optional[str] = Field(
        default=None, description="Full SQLAlchemy async URL, replaces the POSTGRES_* parts"
    )
    DB_AUTO_CREATE: bool = Field(
        default=False, description="Create the locations table on API startup"
    )

    # =============================================================================
    # ANCESTOR RESOLUTION
    # =============================================================================
    DB_QUERY_TIMEOUT: float = Field(
        default=Timeouts.DB_QUERY, gt=0, description="Timeout per store operation (seconds)"
    )
    ANCESTOR_MAX_DEPTH: int = Field(
        default=64, ge=1, description="Maximum ancestors followed before the cycle guard trips"
    )
    ANCESTOR_STRATEGY: str = Field(
        default="recursive", description="Resolution strategy: recursive (single CTE query) or iterative"
    )

    # =============================================================================
    # API
    # =============================================================================
    API_HOST: str = Field(default="127.0.0.1", description="Bind address")
    API_PORT: int = Field(default=3000, description="Bind port")
    API_CORS_ORIGINS: str = Field(
        default="http://localhost:3000,http://127.0.0.1:3000",
        description="Comma-separated list of allowed CORS origins",
    )
    COUNTER_INTERVAL_SECONDS: float = Field(
        default=0.5, gt=0, description="Push interval of the counter WebSocket"
    )

    # =============================================================================
    # VALIDATORS
    # =============================================================================

    @field_validator("ANCESTOR_STRATEGY", mode="before")
    @classmethod
    def parse_ancestor_strategy(cls, v):
        """Normalize and validate the resolution strategy name."""
        if isinstance(v, str):
            v = v.strip().lower()
        if v not in ANCESTOR_STRATEGIES:
            raise ValueError(
                f"ANCESTOR_STRATEGY must be one of {', '.join(ANCESTOR_STRATEGIES)}, got {v!r}"
            )
        return v

    @field_validator("LOG_FORMAT", mode="before")
    @classmethod
    def parse_log_format(cls, v):
        """Accept 'text' as an alias for console output."""
        if isinstance(v, str) and v.strip().lower() == "text":
            return "console"
        return v

    @property
    def DATABASE_URL(self) -> str:
        """Construct the async PostgreSQL connection URL from components."""
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    def get_cors_origins(self) -> list[str]:
        """
        Get CORS origins as a list.

        Falls back to localhost defaults when the variable is empty, and
        logs an error if a wildcard is configured.
        """
        import logging
        logger = logging.getLogger(__name__)

        origins = [origin.strip() for origin in self.API_CORS_ORIGINS.split(",") if origin.strip()]

        if not origins:
            logger.warning("API_CORS_ORIGINS is empty, using localhost defaults")
            return ["http://localhost:3000", "http://127.0.0.1:3000"]

        if "*" in origins:
            logger.error(
                "Wildcard (*) CORS origin detected in API_CORS_ORIGINS. "
                "Specify explicit origins instead."
            )

        return origins


# Global settings instance (singleton)
settings = Settings()
