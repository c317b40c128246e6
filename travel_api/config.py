"""
Travel API — Application Configuration
========================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or a local .env
       file outside production), validates types/ranges, and exposes derived
       values such as the SQLAlchemy URL as properties.
Who:   Imported by main.py, the CLI entry point, and the datastore factory.
When:  Loaded once at module import time.

Environment variables (case-insensitive):
    NODE_ENV                 development | production (gates .env loading)
    DB_HOST / DB_PORT        MySQL server location
    DB_USER / DB_PASSWORD    MySQL credentials
    DB_NAME                  MySQL schema name
    DATABASE_URL             Full SQLAlchemy URL; overrides the DB_* parts
    PORT / APP_HOST          HTTP listener
"""

import os
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Defaults match a local MySQL install so the server starts with no
    configuration at all during development.
    """

    # ── Runtime Environment ───────────────────────────────────────────────
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("NODE_ENV", "ENVIRONMENT"),
        description="Runtime mode reported by /api/test-db",
    )

    # ── Database ──────────────────────────────────────────────────────────
    db_host: str = Field(default="localhost")
    db_user: str = Field(default="root")
    db_password: str = Field(default="")
    db_name: str = Field(default="samer")
    db_port: int = Field(default=3306, ge=1, le=65535)

    # What: Complete SQLAlchemy URL, e.g. sqlite+aiosqlite:///./local.db
    # When set, the DB_* parts above are ignored
    database_url_override: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DATABASE_URL", "DATABASE_URL_OVERRIDE"),
    )

    # Pool ceiling of 10 connections; no overflow beyond it
    db_pool_size: int = Field(default=10, ge=1, le=100)
    db_max_overflow: int = Field(default=0, ge=0, le=50)
    # Seconds a caller waits in the pool queue before the checkout fails
    db_pool_timeout: float = Field(default=30.0, gt=0)
    db_pool_pre_ping: bool = Field(default=True)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated; "*" allows any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    # APP_HOST, not HOST: many shells and CI runners export HOST as the hostname
    host: str = Field(default="0.0.0.0", validation_alias=AliasChoices("APP_HOST"))
    port: int = Field(default=5000, ge=1, le=65535)

    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Error Responses ───────────────────────────────────────────────────
    # None means "expose unless running in production"
    expose_error_details: Optional[bool] = Field(default=None)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def expose_errors(self) -> bool:
        """Whether driver error text is returned to API clients."""
        if self.expose_error_details is None:
            return not self.is_production
        return self.expose_error_details

    @property
    def database_url(self) -> str:
        """
        SQLAlchemy URL for the async MySQL driver.

        Built with URL.create so passwords containing '@' or '/' are escaped.
        """
        if self.database_url_override:
            return self.database_url_override
        url = URL.create(
            drivername="mysql+aiomysql",
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )
        return url.render_as_string(hide_password=False)


def get_settings() -> Settings:
    """
    Build a Settings instance for the current process environment.

    The local .env file is only consulted outside production; deployed
    platforms inject real environment variables instead.
    """
    if os.getenv("NODE_ENV", "").lower() == "production":
        return Settings(_env_file=None)
    return Settings()


settings = get_settings()
