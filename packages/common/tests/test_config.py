"""Tests for configuration management module.

Tests cover:
- Settings defaults
- Environment variable overrides
- Field validators (log_level, log_format, numeric bounds)
- Settings caching (lru_cache)
- .env file configuration
"""

from __future__ import annotations

import os

import pytest
from pydantic import ValidationError

from shelf_common.config import Settings, get_settings

pytestmark = pytest.mark.unit


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def clean_env():
    """Provide a clean environment without config-related vars."""
    env_vars = [
        "DATABASE_PATH",
        "LOG_LEVEL",
        "LOG_FORMAT",
        "INGESTION_DEFER_SECONDS",
        "ANALYSIS_BACKEND",
        "COVER_SNIPPET_CHARS",
    ]
    original_values = {var: os.environ.get(var) for var in env_vars}

    for var in env_vars:
        if var in os.environ:
            del os.environ[var]

    yield

    for var, value in original_values.items():
        if value is not None:
            os.environ[var] = value
        elif var in os.environ:
            del os.environ[var]


@pytest.fixture
def clear_settings_cache():
    """Clear the settings cache before and after each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Test Default Values
# =============================================================================


class TestSettingsDefaults:
    """Test Settings has correct default values."""

    def test_database_path_default(self, clean_env):
        """Test database_path points at the per-user data directory."""
        settings = Settings()

        assert settings.database_path == "~/.local/share/media-shelf/library.db"

    def test_log_level_default(self, clean_env):
        """Test log_level defaults to INFO."""
        settings = Settings()

        assert settings.log_level == "INFO"

    def test_log_format_default(self, clean_env):
        """Test log_format defaults to console."""
        settings = Settings()

        assert settings.log_format == "console"

    def test_ingestion_defer_default(self, clean_env):
        """Test ingestion is deferred by a tenth of a second."""
        settings = Settings()

        assert settings.ingestion_defer_seconds == 0.1

    def test_analysis_backend_default(self, clean_env):
        """Test analysis backend defaults to disabled."""
        settings = Settings()

        assert settings.analysis_backend == "disabled"

    def test_cover_snippet_default(self, clean_env):
        """Test cover snippet length defaults to 300 characters."""
        settings = Settings()

        assert settings.cover_snippet_chars == 300


# =============================================================================
# Test Environment Variable Overrides
# =============================================================================


class TestEnvironmentOverrides:
    """Test Settings can be overridden via environment variables."""

    def test_database_path_override(self, clean_env):
        """Test DATABASE_PATH environment variable override."""
        os.environ["DATABASE_PATH"] = "/tmp/shelf.db"

        settings = Settings()

        assert settings.database_path == "/tmp/shelf.db"

    def test_log_level_override(self, clean_env):
        """Test LOG_LEVEL environment variable override."""
        os.environ["LOG_LEVEL"] = "DEBUG"

        settings = Settings()

        assert settings.log_level == "DEBUG"

    def test_log_format_override(self, clean_env):
        """Test LOG_FORMAT environment variable override."""
        os.environ["LOG_FORMAT"] = "json"

        settings = Settings()

        assert settings.log_format == "json"

    def test_ingestion_defer_override(self, clean_env):
        """Test INGESTION_DEFER_SECONDS is coerced to float."""
        os.environ["INGESTION_DEFER_SECONDS"] = "0"

        settings = Settings()

        assert settings.ingestion_defer_seconds == 0.0

    def test_case_insensitive_env_vars(self, clean_env):
        """Test environment variables are case insensitive."""
        os.environ["database_path"] = "/tmp/lower.db"

        try:
            settings = Settings()
            assert settings.database_path == "/tmp/lower.db"
        finally:
            del os.environ["database_path"]


# =============================================================================
# Test Field Validators
# =============================================================================


class TestLogLevelValidator:
    """Test log_level validator."""

    def test_log_level_lowercase_converted(self, clean_env):
        """Test lowercase log level is converted to uppercase."""
        settings = Settings(log_level="debug")
        assert settings.log_level == "DEBUG"

    def test_log_level_mixed_case_converted(self, clean_env):
        """Test mixed case log level is converted to uppercase."""
        settings = Settings(log_level="Warning")
        assert settings.log_level == "WARNING"

    def test_log_level_invalid_raises(self, clean_env):
        """Test invalid log level raises validation error."""
        with pytest.raises(ValidationError) as exc_info:
            Settings(log_level="INVALID")

        errors = exc_info.value.errors()
        assert any("log_level" in str(e) for e in errors)

    def test_log_level_invalid_via_env(self, clean_env):
        """Test invalid log level via environment variable raises error."""
        os.environ["LOG_LEVEL"] = "TRACE"

        with pytest.raises(ValidationError):
            Settings()


class TestLogFormatValidator:
    """Test log_format validator."""

    def test_log_format_uppercase_converted(self, clean_env):
        """Test uppercase log format is converted to lowercase."""
        settings = Settings(log_format="JSON")
        assert settings.log_format == "json"

    def test_log_format_invalid_raises(self, clean_env):
        """Test invalid log format raises validation error."""
        with pytest.raises(ValidationError) as exc_info:
            Settings(log_format="xml")

        errors = exc_info.value.errors()
        assert any("log_format" in str(e) for e in errors)


class TestNumericBounds:
    """Test numeric field constraints."""

    def test_negative_defer_rejected(self, clean_env):
        """Test a negative deferral is rejected."""
        with pytest.raises(ValidationError):
            Settings(ingestion_defer_seconds=-1)

    def test_zero_snippet_rejected(self, clean_env):
        """Test cover snippet length must be positive."""
        with pytest.raises(ValidationError):
            Settings(cover_snippet_chars=0)


# =============================================================================
# Test Settings Caching
# =============================================================================


class TestGetSettings:
    """Test get_settings function and caching."""

    def test_get_settings_returns_settings(self, clean_env, clear_settings_cache):
        """Test get_settings returns a Settings instance."""
        assert isinstance(get_settings(), Settings)

    def test_get_settings_cached(self, clean_env, clear_settings_cache):
        """Test get_settings returns cached instance."""
        assert get_settings() is get_settings()

    def test_cache_clear_reloads_settings(self, clean_env, clear_settings_cache):
        """Test clearing cache causes reload."""
        settings1 = get_settings()

        os.environ["LOG_LEVEL"] = "DEBUG"

        assert get_settings() is settings1

        get_settings.cache_clear()

        settings3 = get_settings()
        assert settings3 is not settings1
        assert settings3.log_level == "DEBUG"


# =============================================================================
# Test Model Configuration
# =============================================================================


class TestModelConfig:
    """Test Settings model configuration."""

    def test_extra_fields_ignored(self, clean_env):
        """Test extra fields are ignored (not raising errors)."""
        os.environ["UNKNOWN_SETTING"] = "value"

        try:
            settings = Settings()
        finally:
            del os.environ["UNKNOWN_SETTING"]

        assert not hasattr(settings, "unknown_setting")

    def test_env_file_config(self):
        """Test env_file is configured."""
        assert Settings.model_config.get("env_file") == ".env"
        assert Settings.model_config.get("env_file_encoding") == "utf-8"

    def test_fields_have_descriptions(self):
        """Test key fields carry descriptions."""
        properties = Settings.model_json_schema().get("properties", {})

        assert "description" in properties["database_path"]
        assert "description" in properties["ingestion_defer_seconds"]
