"""
Application settings management.

Settings are loaded from environment variables with .env file support.
All configuration is validated using Pydantic.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment.

    Environment variables take precedence over .env file values.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # ==========================================================================
    # Paths
    # ==========================================================================

    questions_dir: Path = Field(
        default=Path("config/questions"),
        description="Directory containing YAML question definitions",
    )

    # ==========================================================================
    # Logging
    # ==========================================================================

    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Minimum log level")
    log_dir: Optional[Path] = Field(
        default=None,
        description="Directory for per-session log files (no file logging if unset)",
    )
    log_sessions_to_keep: int = Field(
        default=5, ge=1, le=100, description="Number of session log files to retain"
    )

    # ==========================================================================
    # Prompt Defaults
    # ==========================================================================

    prompt_prefix: str = Field(default="", description="Text printed before every question")
    max_retries: int = Field(
        default=3, ge=1, le=100, description="Maximum attempts per question before giving up"
    )
    blank_input_is_absent: bool = Field(
        default=True,
        description="Treat an empty input line as no answer (so defaults apply)",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case the level name and reject unknown levels."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


# Global settings instance
settings = Settings()
