"""
Movies API — Application Configuration
========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before the app starts.
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import List


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have working defaults for a local MongoDB on the standard port.
    Attributes are grouped by concern.
    """

    # ── MongoDB ───────────────────────────────────────────────────────────
    # Format: mongodb://[user:password@]host[:port][/?options]
    mongo_url: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI"
    )

    mongo_database: str = Field(default="movies_db")
    mongo_collection: str = Field(default="movies")

    # How long the driver waits to find a usable server before failing an operation.
    # Also bounds the startup ping, so a dead database aborts startup quickly.
    mongo_server_selection_timeout_ms: int = Field(default=5000, ge=1000, le=60000)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: comma-separated origins, or "*"
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

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

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # MONGO_URL and mongo_url both work
    }


# Singleton instance, imported throughout the application
settings = Settings()
