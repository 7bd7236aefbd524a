"""
Foodies Backend — Application Configuration
=============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before app starts.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Drivers that work with create_async_engine
ASYNC_DRIVERS = ("+aiosqlite", "+asyncpg", "+aiomysql", "+asyncmy")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every setting has a development default, so a fresh checkout runs with
    a local `meals.db` file and a `public/images` directory next to it.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Single-file SQLite store through the aiosqlite driver.
    # Format: sqlite+aiosqlite:///<relative path>  (three slashes = relative)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./meals.db",
        description="Async SQLAlchemy connection URL for the meals store",
    )

    # Echo every SQL statement (development only, very noisy)
    db_echo: bool = Field(default=False)

    # ── Image Storage ─────────────────────────────────────────────────────
    # Uploaded meal images land here and are served back under images_url_prefix.
    # The stored `image` column is "<images_url_prefix>/<filename>" so the
    # presentation layer can use it as-is in an <img src>.
    images_dir: str = Field(default="./public/images")
    images_url_prefix: str = Field(default="/images")

    # Default 5MB; range 1KB..50MB
    max_image_size: int = Field(default=5_242_880, ge=1_024, le=52_428_800)

    # ── Listing Cache ─────────────────────────────────────────────────────
    # Seconds a cached GET /meals payload stays valid.
    # 0 = keep until a successful share invalidates it.
    listing_cache_ttl: int = Field(default=0, ge=0, le=86400)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated origins of the frontend(s) allowed to call the API
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
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

    @field_validator("images_url_prefix")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/") or "/"

    # ── Rate Limiting ─────────────────────────────────────────────────────
    # Per-IP sliding window, applied to form submissions (mutating methods) only
    rate_limit_requests: int = Field(default=30, ge=1, le=10000)
    rate_limit_window: int = Field(default=3600, ge=60, le=86400)  # seconds

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DATABASE_URL and database_url both work
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that the storage settings are usable.
        When:  Called during app startup (lifespan).
        How:   Collects every problem and raises one ValueError listing them all.
        """
        errors = []
        if not any(driver in self.database_url for driver in ASYNC_DRIVERS):
            errors.append(
                f"DATABASE_URL '{self.database_url}' does not use an async driver. "
                "Use e.g. sqlite+aiosqlite:///./meals.db"
            )
        if not self.images_url_prefix.startswith("/"):
            errors.append(
                f"IMAGES_URL_PREFIX '{self.images_url_prefix}' must be an absolute path such as /images"
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Module-level instance shared by every importer
settings = Settings()
