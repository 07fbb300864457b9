"""
NoteApp Backend — Application Configuration
=============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by main.py; tests build their own Settings and hand it to
       create_app() so every test gets an isolated data directory.
When:  Loaded once at module import time; validated before app starts.

Persisted layout controlled by this module:
    <data_dir>/<users_file>      JSON array of users (shared)
    <data_dir>/<username>.json   JSON array of notes (one per user)
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

PACKAGE_ROOT = Path(__file__).resolve().parent

# Placeholder secret used when SESSION_SECRET is not configured
DEV_SESSION_SECRET = "dev-only-change-me"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for development.
    Production deployments MUST override SESSION_SECRET.
    """

    # ── Storage ───────────────────────────────────────────────────────────
    # What: Directory holding the user collection and per-user note files
    data_dir: str = Field(default="./data")

    # What: File name of the shared user collection inside data_dir
    users_file: str = Field(default="users.json")

    # ── Presentation ──────────────────────────────────────────────────────
    templates_dir: str = Field(default=str(PACKAGE_ROOT / "templates"))
    static_dir: str = Field(default=str(PACKAGE_ROOT / "static"))

    # ── Session Cookie ────────────────────────────────────────────────────
    # What: Key used by itsdangerous to sign the session cookie
    session_secret: str = Field(default=DEV_SESSION_SECRET)
    session_cookie: str = Field(default="session")
    # 14 days
    session_max_age: Optional[int] = Field(default=14 * 24 * 60 * 60, ge=60)
    session_https_only: bool = Field(default=False)

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8080, ge=1024, le=65535)

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

    @field_validator("users_file")
    @classmethod
    def validate_users_file(cls, v: str) -> str:
        """The user collection must live directly inside data_dir."""
        if not v.endswith(".json") or Path(v).name != v:
            raise ValueError(f"Invalid users_file '{v}'. Must be a bare '*.json' file name")
        return v

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir)

    @property
    def users_path(self) -> Path:
        return self.data_path / self.users_file

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that critical settings are configured.
        When:  Called during app startup (lifespan).
        How:   Checks each required field and raises ValueError with guidance.
        """
        errors = []
        if not self.session_secret or self.session_secret == DEV_SESSION_SECRET:
            errors.append(
                "SESSION_SECRET is not set. Session cookies are signed with a "
                "development key anyone can read from the source."
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


settings = Settings()
