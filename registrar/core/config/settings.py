# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

This module provides centralized configuration management for the
registrar engine. Settings are loaded from environment variables with
sensible defaults.

The Settings class is the main entry point and aggregates all subsettings.
A singleton instance is provided via get_settings() for dependency injection.

Example:
    >>> from registrar.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> print(settings.registrar_api.base_url)
    'http://localhost:8080/api'
"""

from functools import lru_cache
from typing import Literal, Self
from urllib.parse import urlparse

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RegistrarAPISettings(BaseSettings):
    """Registrar backend (REST) configuration.

    The backend owns sections, schedules, curricula and enrollments.
    The engine only reads snapshots from it and commits enrollments
    and drops to it.

    Attributes:
        base_url: Base URL of the registrar REST API.
        api_key: Optional API key sent as X-API-Key.
        timeout: Request timeout in seconds.
    """

    model_config = SettingsConfigDict(
        env_prefix="REGISTRAR_API_",
        extra="ignore",
    )

    base_url: str = "http://localhost:8080/api"
    api_key: SecretStr | None = None
    timeout: float = 30.0

    @property
    def auth_headers(self) -> dict[str, str]:
        """Build authentication headers for API requests."""
        if self.api_key is None:
            return {}
        return {"X-API-Key": self.api_key.get_secret_value()}


class EnrollmentSettings(BaseSettings):
    """Enrollment resolution configuration.

    Attributes:
        surface_full_slots: Whether slots with status Full are offered as
            enrollment candidates (they are non-terminal, the backend
            decides capacity on commit).
        default_semester: Semester tag used when the caller passes none.
            "all" disables the semester filter.
    """

    model_config = SettingsConfigDict(
        env_prefix="ENROLLMENT_",
        extra="ignore",
    )

    surface_full_slots: bool = True
    default_semester: str = "all"


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings.

    Use get_settings() to obtain a cached singleton instance.

    Attributes:
        environment: Current environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level.
        registrar_api: Registrar backend settings.
        enrollment: Enrollment resolution settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"

    # Subsettings - loaded with their own env prefixes
    registrar_api: RegistrarAPISettings = Field(default_factory=RegistrarAPISettings)
    enrollment: EnrollmentSettings = Field(default_factory=EnrollmentSettings)

    @model_validator(mode="after")
    def validate_production_settings(self) -> Self:
        """Validate that production settings are properly configured.

        Raises:
            ValueError: If running in production against a local backend.
        """
        if self.environment == "production":
            host = urlparse(self.registrar_api.base_url).hostname or ""
            if host in ("localhost", "127.0.0.1"):
                raise ValueError(
                    "Registrar API base URL must not point at localhost in production. "
                    "Set REGISTRAR_API_BASE_URL environment variable."
                )
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call clear_settings_cache() if you need to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Call this if you need to reload settings from environment.
    Useful for testing or dynamic configuration updates.
    """
    get_settings.cache_clear()
