"""
Configuration — typed, validated settings loaded from environment/.env.

Uses pydantic-settings to:
  - Load from environment variables prefixed with RAILWAY_RESULT_
  - Fall back to a .env file in the working directory
  - Validate values when the settings object is created

Only the ambient concerns are configurable (logging); the Result algebra
itself has no knobs.

    RAILWAY_RESULT_LOG_LEVEL=DEBUG
    RAILWAY_RESULT_LOG_FORMAT=json
    RAILWAY_RESULT_EXECUTION_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

import logging
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class RailwaySettings(BaseSettings):
    """
    Logging settings for applications built on railway_result.

    Load order (highest priority first):
      1. Keyword arguments
      2. Environment variables
      3. .env file
      4. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="RAILWAY_RESULT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Minimum level emitted by structlog")
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="console for humans, json for log shippers",
    )
    execution_log_level: str = Field(
        default="INFO",
        description="Level of the start/completion events of LoggingExecutionContext",
    )
    cache_loggers: bool = Field(
        default=True,
        description="structlog cache_logger_on_first_use",
    )

    @field_validator("log_level", "execution_log_level")
    @classmethod
    def validate_level(cls, value: str) -> str:
        """Accept standard level names in any case, store them upper-case."""
        level = value.strip().upper()
        if level not in _LEVEL_NAMES:
            raise ValueError(
                f"Log level must be one of {', '.join(_LEVEL_NAMES)}, got {value!r}"
            )
        return level

    def execution_level(self) -> int:
        """execution_log_level as a stdlib logging level number."""
        return getattr(logging, self.execution_log_level, logging.INFO)
