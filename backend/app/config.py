"""
Notas Backend - Application Configuration
==========================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the database layer, the access policy and the app factory.
When:  Loaded once at module import time; validated before app starts.
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, model_validator


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults matching the original single-file deployment:
    a local SQLite file, port 5000, a five-note cap and a 16h-18h window.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # What: Async SQLite connection string using the aiosqlite driver
    # The file is created on first start if it does not exist
    database_url: str = Field(
        default="sqlite+aiosqlite:///./database.sqlite",
        description="Async SQLAlchemy connection URL",
    )

    # ── Access Policy ─────────────────────────────────────────────────────
    # What: Maximum number of notes before the add form is refused
    # The refusal text always says "5" (NOTE_LIMIT_MESSAGE); it does not
    # follow this value
    note_limit: int = Field(default=5, ge=1)

    # What: Local-time hour range [opening_hour, closing_hour) in which any
    # request is served; everything else gets a 403
    opening_hour: int = Field(default=16, ge=0, le=23)
    closing_hour: int = Field(default=18, ge=1, le=24)

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=5000, ge=1024, le=65535)

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

    @model_validator(mode="after")
    def validate_window(self) -> "Settings":
        """Rejects an empty or inverted access window."""
        if self.closing_hour <= self.opening_hour:
            raise ValueError(
                f"closing_hour ({self.closing_hour}) must be greater than "
                f"opening_hour ({self.opening_hour})"
            )
        return self

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DATABASE_URL and database_url both work
    }


# Singleton instance, imported throughout the application
settings = Settings()
