"""
Application Configuration Module

This module uses Pydantic Settings for type-safe configuration management.

Two values have no default and must come from the environment (or .env):

- DATABASE_URL: SQLAlchemy connection URL for the library database
- SECRET_KEY: shared secret used to sign and verify bearer tokens

If either is missing, or SECRET_KEY is a placeholder, get_settings() raises
a ValidationError and the application refuses to start.

Usage:
    from library_api.config import get_settings

    settings = get_settings()
    print(settings.app_name)
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Pydantic Settings automatically:
    1. Reads from environment variables (case-insensitive)
    2. Falls back to .env file if env var not found
    3. Validates types and raises errors for invalid values
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = Field(
        default="Library API",
        description="Application name displayed in docs and logs"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (detailed errors, SQL echo, auto-reload)"
    )
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the server to"
    )
    port: int = Field(
        default=4000,
        description="Port to bind the server to"
    )
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )

    # -------------------------------------------------------------------------
    # Database Settings
    # -------------------------------------------------------------------------
    database_url: str = Field(
        ...,
        description="SQLAlchemy connection URL, e.g. postgresql://user:pw@host/db"
    )
    db_pool_size: int = Field(
        default=5,
        description="Number of permanent database connections"
    )
    db_max_overflow: int = Field(
        default=10,
        description="Maximum additional connections during high load"
    )

    # -------------------------------------------------------------------------
    # Security Settings
    # -------------------------------------------------------------------------
    secret_key: str = Field(
        ...,
        description="Secret used to sign bearer tokens"
    )
    access_token_expire_minutes: int = Field(
        default=60 * 24,
        description="Lifetime of tokens issued by the login mutation"
    )
    allowed_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed CORS origins"
    )

    # -------------------------------------------------------------------------
    # GraphQL Settings
    # -------------------------------------------------------------------------
    graphql_playground_enabled: bool = Field(
        default=True,
        description="Serve the Apollo Sandbox IDE on GET /graphql (never in production)"
    )

    # -------------------------------------------------------------------------
    # Logging Settings
    # -------------------------------------------------------------------------
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def graphql_ide_enabled(self) -> bool:
        """The IDE is never served in production, whatever the flag says."""
        return self.graphql_playground_enabled and not self.is_production

    @property
    def is_sqlite(self) -> bool:
        """SQLite URLs need different engine options than server databases."""
        return self.database_url.startswith("sqlite")

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that log_level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """
        Reject placeholder or short signing secrets.

        Raises:
            ValueError: If secret key is a placeholder or too short
        """
        placeholder_indicators = [
            "REPLACE_WITH",
            "change-me",
            "your-secret",
            "generate-with",
        ]

        for indicator in placeholder_indicators:
            if indicator.lower() in v.lower():
                raise ValueError(
                    "SECRET_KEY contains a placeholder value. "
                    "Generate a secure key with: openssl rand -hex 32"
                )

        if len(v) < 32:
            raise ValueError(
                "SECRET_KEY must be at least 32 characters long. "
                "Generate a secure key with: openssl rand -hex 32"
            )

        return v

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is a known value."""
        valid_envs = {"development", "staging", "production"}
        if v.lower() not in valid_envs:
            raise ValueError(f"environment must be one of {valid_envs}")
        return v.lower()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    The first call reads the environment (and .env) and validates it;
    later calls return the same instance.

    Returns:
        Cached Settings instance
    """
    return Settings()
