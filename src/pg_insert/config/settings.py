"""
Configuration management for pg-insert.

This module provides environment-based configuration using Pydantic
BaseSettings. Values are read from environment variables (``PGI_`` prefix)
and, when present, from a ``.env`` file in the working directory
(``PGI_ENV_FILE`` points elsewhere).
"""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE_NAME = ".env"


def resolve_env_file() -> Path:
    """
    Locate the .env file settings are read from.

    PGI_ENV_FILE wins when set (relative paths are taken from the working
    directory); otherwise .env in the working directory is used.
    """
    override = os.getenv("PGI_ENV_FILE")
    if override:
        return Path(override).expanduser().resolve()
    return Path.cwd() / ENV_FILE_NAME


VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Environment variables are loaded with the PGI_ prefix, e.g.
    PGI_VALIDATE_ROWS=false disables row shape checking by default.
    LOG_LEVEL is read without prefix so it can be shared with the host
    application.
    """

    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (uppercase)",
    )

    log_to_file: bool = Field(
        default=False, description="Also write logs to a daily rotating file"
    )
    log_file_dir: str = Field(
        default="logs", description="Directory for rotating log files"
    )

    validate_rows: bool = Field(
        default=True,
        description=(
            "Require every record's field map to have the first record's keys; "
            "default for InsertBuilder(validate_rows=None)"
        ),
    )
    log_sql: bool = Field(
        default=False,
        description="Include generated SQL text in insert_sql_built debug events",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}, got: {value}"
            )
        return level

    model_config = SettingsConfigDict(
        env_prefix="PGI_",
        env_file=ENV_FILE_NAME,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are loaded once and reused across
    the application lifecycle.

    Returns:
        Settings instance with loaded configuration
    """
    return Settings(_env_file=resolve_env_file())
