"""Tests for configuration management."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from schemashift.config import Settings, load_settings
from schemashift.types import Environment


def test_default_settings() -> None:
    """Test default settings values."""
    with patch.dict(os.environ, {}, clear=True):
        settings = Settings()

        assert settings.environment == Environment.DEVELOPMENT
        assert settings.log_level == "INFO"
        assert settings.mysql_engine == "InnoDB"
        assert settings.mysql_charset == "utf8mb4"
        assert settings.varchar_default_length == 255
        assert settings.warn_on_unknown_type is True
        assert settings.emit_indexes is True


def test_production_mode_properties() -> None:
    """Test production mode properties."""
    with patch.dict(os.environ, {"SCHEMASHIFT_ENV": "production"}, clear=True):
        settings = load_settings()

        assert settings.is_development is False
        assert settings.is_production is True
        assert settings.is_testing is False


def test_testing_mode_properties() -> None:
    """Test testing mode properties."""
    with patch.dict(os.environ, {"SCHEMASHIFT_ENV": "testing"}, clear=True):
        settings = load_settings()

        assert settings.is_development is False
        assert settings.is_production is False
        assert settings.is_testing is True


def test_custom_settings() -> None:
    """Test custom settings via environment variables."""
    env_vars = {
        "SCHEMASHIFT_LOG_LEVEL": "debug",
        "SCHEMASHIFT_MYSQL_ENGINE": "MyISAM",
        "SCHEMASHIFT_MYSQL_CHARSET": "latin1",
        "SCHEMASHIFT_VARCHAR_DEFAULT_LENGTH": "191",
        "SCHEMASHIFT_WARN_ON_UNKNOWN_TYPE": "false",
        "SCHEMASHIFT_EMIT_INDEXES": "0",
    }

    with patch.dict(os.environ, env_vars, clear=True):
        settings = load_settings()

        assert settings.log_level == "DEBUG"
        assert settings.mysql_engine == "MyISAM"
        assert settings.mysql_charset == "latin1"
        assert settings.varchar_default_length == 191
        assert settings.warn_on_unknown_type is False
        assert settings.emit_indexes is False


def test_invalid_varchar_length() -> None:
    """Test that a non-positive default length is rejected."""
    with pytest.raises(ValidationError):
        Settings(varchar_default_length=0)
