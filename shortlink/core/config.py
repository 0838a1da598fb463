"""Application configuration module.

This module contains settings for the URL shortener service,
loaded from environment variables with appropriate defaults.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, List, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent


class EnvironmentType(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """Application settings loaded from environment variables with defaults.

    Settings are loaded from environment variables, with fallback to
    values in .env file if present, and finally to the default values
    specified here.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment setting
    ENVIRONMENT: EnvironmentType = EnvironmentType.DEVELOPMENT

    # App Information
    APP_NAME: str = "Shortlink"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "A small URL shortening service backed by SQLite"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # API Configuration
    BASE_URL: str = "http://localhost:8080"  # Prefix of every generated short URL
    API_PREFIX: str = "/api"
    DEBUG: bool = False

    # CORS settings
    CORS_ORIGINS: Union[List[str], str] = ["*"]

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./urls.db"
    DB_ECHO: bool = False

    # Token allocation
    TOKEN_BYTES: int = 6  # 6 random bytes encode to 8 characters
    TOKEN_SAVE_ATTEMPTS: int = 3  # Regenerations allowed on token collision

    # Logging configuration
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_FILENAME: str = "app.log"
    LOG_ROTATION: str = "10 MB"
    LOG_RETENTION: str = "7 days"
    LOG_FORMAT: str = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {name}:{line} | {message}"
    LOG_JSON: bool = True
    LOG_TO_FILE: bool = True
    REQUEST_LOGGING_ENABLED: bool = True
    URL_ACCESS_LOGGING_ENABLED: bool = True

    # Validators
    @field_validator("BASE_URL")
    def strip_trailing_slash(cls, v: str) -> str:
        """Short URLs are built as BASE_URL + "/" + token."""
        return v.rstrip("/")

    @field_validator("TOKEN_BYTES", "TOKEN_SAVE_ATTEMPTS")
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @field_validator("CORS_ORIGINS")
    def validate_list_or_string(cls, v: Union[List[str], str]) -> List[str]:
        """Convert comma-separated string to list if needed."""
        if isinstance(v, str):
            if not v.strip():
                return []
            if v == "*":
                return ["*"]
            return [item.strip() for item in v.split(",")]
        return v

    @field_validator("LOG_LEVEL")
    def normalize_log_level(cls, v: Any) -> str:
        return str(v).upper()

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


# Create a singleton instance of the settings
settings = Settings()
