"""Typed settings loader for the One Call inspection tooling."""

from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: LogLevel = Field(default="INFO", alias="OWM_LOG_LEVEL")
    max_print: int = Field(default=8, alias="OWM_MAX_PRINT")
    payload_max_bytes: int = Field(default=5 * 1024 * 1024, alias="OWM_PAYLOAD_MAX_BYTES")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Any) -> Any:
        """Accept lower-case level names from the environment."""
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @model_validator(mode="after")
    def validate_limits(self) -> Settings:
        if self.max_print <= 0:
            raise ValueError("OWM_MAX_PRINT must be > 0.")
        if self.payload_max_bytes <= 0:
            raise ValueError("OWM_PAYLOAD_MAX_BYTES must be > 0.")
        return self

    @property
    def logging_level(self) -> int:
        return logging.getLevelName(self.log_level)

    def safe_summary(self) -> dict[str, Any]:
        """Return a config summary suitable for startup logging."""
        return {
            "log_level": self.log_level,
            "max_print": self.max_print,
            "payload_max_bytes": self.payload_max_bytes,
        }


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc
