"""
LexiNote Backend — Application Configuration
==============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types, and exposes a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time.

Note:
    Vendor credentials are NOT configured here. API keys and model names
    belong to the user's Provider Config records (see services/provider_service.py)
    and are passed per call. Only the fallback model names live in settings.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development.
    Attributes are grouped by concern for readability.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Single-file embedded database through the aiosqlite async driver
    # Format: sqlite+aiosqlite:///<path>
    database_url: str = Field(
        default="sqlite+aiosqlite:///./lexinote.db",
        description="Async SQLAlchemy connection URL",
    )

    # ── AI Vendors ────────────────────────────────────────────────────────
    # Used when a Provider Config leaves its model name empty
    openai_default_model: str = Field(default="gpt-3.5-turbo")
    gemini_default_model: str = Field(default="gemini-pro")
    anthropic_default_model: str = Field(default="claude-3-sonnet-20240229")

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs (split by cors_origins_list)
    cors_origins: str = Field(default="http://localhost:3000,http://localhost:8081")

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
        "case_sensitive": False,  # DATABASE_URL and database_url both work
        "extra": "ignore",
    }

    def default_model_for(self, vendor: str) -> str:
        """
        Returns the fallback model name for a vendor tag.

        Unknown vendors get an empty string; the dispatch facade rejects
        them before any adapter looks at the model.
        """
        return {
            "openai": self.openai_default_model,
            "gemini": self.gemini_default_model,
            "anthropic": self.anthropic_default_model,
        }.get(vendor, "")


# Singleton instance, imported throughout the application
settings = Settings()
