# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for application settings."""

import os
from unittest.mock import patch

import pytest

from registrar.core.config.settings import (
    EnrollmentSettings,
    RegistrarAPISettings,
    Settings,
    clear_settings_cache,
    get_settings,
)


class TestRegistrarAPISettings:
    """Tests for RegistrarAPISettings."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        settings = RegistrarAPISettings()

        assert settings.base_url == "http://localhost:8080/api"
        assert settings.api_key is None
        assert settings.timeout == 30.0

    def test_auth_headers_without_key(self) -> None:
        assert RegistrarAPISettings().auth_headers == {}

    def test_auth_headers_with_key(self) -> None:
        """Test the API key is sent as X-API-Key."""
        settings = RegistrarAPISettings(api_key="secret-key")  # type: ignore[arg-type]

        assert settings.auth_headers == {"X-API-Key": "secret-key"}
        assert "secret-key" not in repr(settings)

    def test_loads_from_environment(self) -> None:
        """Test that settings load from environment variables."""
        env = {
            "REGISTRAR_API_BASE_URL": "https://registrar.example.edu/api",
            "REGISTRAR_API_TIMEOUT": "5",
        }

        with patch.dict(os.environ, env, clear=False):
            settings = RegistrarAPISettings()

        assert settings.base_url == "https://registrar.example.edu/api"
        assert settings.timeout == 5.0


class TestEnrollmentSettings:
    """Tests for EnrollmentSettings."""

    def test_default_values(self) -> None:
        settings = EnrollmentSettings()

        assert settings.surface_full_slots is True
        assert settings.default_semester == "all"

    def test_loads_from_environment(self) -> None:
        env = {
            "ENROLLMENT_SURFACE_FULL_SLOTS": "false",
            "ENROLLMENT_DEFAULT_SEMESTER": "2",
        }

        with patch.dict(os.environ, env, clear=False):
            settings = EnrollmentSettings()

        assert settings.surface_full_slots is False
        assert settings.default_semester == "2"


class TestSettings:
    """Tests for main Settings class."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        settings = Settings()

        assert settings.environment == "development"
        assert settings.debug is True
        assert settings.log_level == "DEBUG"

    def test_subsettings_loaded(self) -> None:
        settings = Settings()

        assert isinstance(settings.registrar_api, RegistrarAPISettings)
        assert isinstance(settings.enrollment, EnrollmentSettings)

    def test_production_with_local_backend_raises_error(self) -> None:
        """Test that production against localhost is rejected."""
        with pytest.raises(ValueError) as exc_info:
            Settings(environment="production")

        assert "must not point at localhost" in str(exc_info.value)

    def test_production_with_remote_backend_succeeds(self) -> None:
        env = {"REGISTRAR_API_BASE_URL": "https://registrar.example.edu/api"}

        with patch.dict(os.environ, env, clear=False):
            settings = Settings(environment="production")

        assert settings.environment == "production"
        assert settings.registrar_api.base_url == "https://registrar.example.edu/api"

    def test_is_development_property(self) -> None:
        """Test is_development property."""
        dev_settings = Settings(environment="development")
        staging_settings = Settings(environment="staging")

        assert dev_settings.is_development is True
        assert staging_settings.is_development is False

    def test_is_production_property(self) -> None:
        """Test is_production property."""
        dev_settings = Settings(environment="development")

        with patch.dict(os.environ, {"REGISTRAR_API_BASE_URL": "https://r.example.edu"}):
            prod_settings = Settings(environment="production")

        assert dev_settings.is_production is False
        assert prod_settings.is_production is True


class TestGetSettings:
    """Tests for get_settings function."""

    def test_returns_cached_instance(self, clean_settings) -> None:
        """Test that get_settings returns cached instance."""
        settings1 = get_settings()
        settings2 = get_settings()

        assert isinstance(settings1, Settings)
        assert settings1 is settings2

    def test_clear_cache_allows_reload(self, clean_settings) -> None:
        """Test that clearing cache picks up new environment values."""
        settings1 = get_settings()

        with patch.dict(os.environ, {"ENROLLMENT_DEFAULT_SEMESTER": "2"}):
            clear_settings_cache()
            settings2 = get_settings()

        assert settings1 is not settings2
        assert settings2.enrollment.default_semester == "2"
