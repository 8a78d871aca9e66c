"""Application configuration module.

This module contains settings for the URL shortener application,
loaded from environment variables with appropriate defaults.
"""

from __future__ import annotations

import string
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from pydantic import computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

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

    ENVIRONMENT: EnvironmentType = EnvironmentType.DEVELOPMENT

    # App Information
    APP_NAME: str = "shortl"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Shortens long links and redirects visitors to them"

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 3000
    API_PREFIX: str = "/api"
    DEBUG: bool = False

    CORS_ORIGINS: Union[List[str], str] = ["*"]

    # Short token generation
    TOKEN_LENGTH: int = 6
    TOKEN_ALPHABET: str = string.ascii_letters
    TOKEN_COLLISION_RETRIES: int = 2  # Extra attempts with a fresh token; 0 fails on first collision

    # PostgreSQL settings
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "shortl"
    DATABASE_URL: Optional[str] = None  # Full SQLAlchemy URL, overrides the POSTGRES_* parts

    # PostgreSQL pool settings
    POSTGRES_POOL_SIZE: int = 20
    POSTGRES_POOL_MAX_OVERFLOW: int = 10
    POSTGRES_POOL_TIMEOUT: int = 30
    POSTGRES_POOL_RECYCLE: int = 300
    DB_ECHO: bool = False

    # Upper bound in seconds for a single unit of work against the store
    DB_OPERATION_TIMEOUT: float = 5.0
    # Per-statement timeout handed to asyncpg
    DB_COMMAND_TIMEOUT: float = 5.0
    DB_CREATE_TABLES: bool = True

    # Bundled single page application
    FRONTEND_ROUTE: str = "/home"
    FRONTEND_DIR: Path = BASE_DIR / "dist"
    FRONTEND_INDEX: str = "index.html"

    # Logging configuration
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_FILENAME: str = "app.log"
    LOG_ROTATION: str = "10 MB"
    LOG_RETENTION: str = "7 days"
    LOG_FORMAT: str = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {message}"
    LOG_JSON: bool = True
    REQUEST_LOGGING_ENABLED: bool = True
    ACCESS_LOG_ENABLED: bool = True
    ACCESS_LOG_FILENAME: str = "link_access.log"

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

    @field_validator("TOKEN_LENGTH")
    def validate_token_length(cls, v: int) -> int:
        if v < 1:
            raise ValueError("TOKEN_LENGTH must be at least 1")
        return v

    @field_validator("TOKEN_COLLISION_RETRIES")
    def validate_retries(cls, v: int) -> int:
        if v < 0:
            raise ValueError("TOKEN_COLLISION_RETRIES cannot be negative")
        return v

    @computed_field
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """Construct the SQLAlchemy database URI from settings or use override."""
        if self.DATABASE_URL:
            return self.DATABASE_URL

        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )


# Create a singleton instance of the settings
settings = Settings()
