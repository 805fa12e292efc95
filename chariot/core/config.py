# File: chariot/core/config.py
"""
Configuration settings for the Chariot reference API.

This module defines application settings using Pydantic's BaseSettings,
which supports environment variable loading and validation.
"""

import json
import re
from typing import Any, List, Union

from pydantic import AnyHttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Values can be overridden through the process environment or a `.env`
    file placed in the working directory.
    """

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        extra="ignore",
    )

    # API settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Chariot"
    VERSION: str = "1.0.0"

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # CORS
    BACKEND_CORS_ORIGINS: List[Union[AnyHttpUrl, str]] = []

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse CORS origins from environment variables."""
        if isinstance(v, str):
            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return parsed
            except json.JSONDecodeError:
                # Fallback to comma-separated format
                return [i.strip() for i in v.split(",") if i.strip()]
        return v or []

    # Database
    DATABASE_URL: str = "sqlite:///./chariot.db"
    INIT_DB_ON_STARTUP: bool = True

    # ================================
    # Localization Configuration
    # ================================

    # Language served when a read does not ask for one
    DEFAULT_LOCALE: str = "en"

    # Translation audit logging
    LOG_TRANSLATION_OPERATIONS: bool = True

    @field_validator("DEFAULT_LOCALE")
    @classmethod
    def validate_default_locale(cls, v: str) -> str:
        """Default locale must be a 2-letter lowercase ISO code."""
        if not re.match(r"^[a-z]{2}$", v):
            raise ValueError("DEFAULT_LOCALE must be a 2-letter lowercase ISO code")
        return v

    # Pagination
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    @field_validator("DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE")
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        """Page sizes are clamped between 1 and 1,000."""
        return max(1, min(v, 1000))

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: Any) -> str:
        """Validate log level is a valid logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        value = str(v).upper()
        return value if value in valid_levels else "INFO"


# Create settings instance
settings = Settings()
