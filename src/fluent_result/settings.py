"""
Settings — typed, validated configuration loaded from environment/.env.

Uses pydantic-settings so a host application can tune the library
without code changes:

  FLUENT_RESULT_LOG_LEVEL=DEBUG
  FLUENT_RESULT_EXPOSE_MESSAGES=false

Invalid values fail at construction with a pydantic ValidationError.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ResultSettings(BaseSettings):
    """
    Library settings.

    Load order (highest priority first):
      1. Environment variables prefixed with FLUENT_RESULT_
      2. .env file in the working directory
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="FLUENT_RESULT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Minimum structlog level")
    expose_messages: bool = Field(
        default=True,
        description="Include Result messages in HTTP response bodies",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Accept only the standard logging level names, case-insensitively."""
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> ResultSettings:
    """Return the process-wide settings, loaded on first use."""
    return ResultSettings()
