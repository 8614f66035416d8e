"""Global pytest configuration and fixtures."""

from logging import Logger

import pytest

from schemashift import setup_test_logging
from schemashift.config import Settings
from schemashift.translator import DialectTranslator


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Setup test logging for all tests."""
    setup_test_logging()


@pytest.fixture(scope="function")
def logger() -> Logger:
    """Provide a logger instance for tests."""
    from schemashift import get_logger

    return get_logger("test")


@pytest.fixture
def test_settings() -> Settings:
    """Settings with field defaults, independent of the environment."""
    return Settings()


@pytest.fixture
def translator(test_settings: Settings) -> DialectTranslator:
    """Translator using default settings."""
    return DialectTranslator(test_settings)


@pytest.fixture
def mysql_users_ddl() -> str:
    """MySQL table covering booleans, enums and an auto-increment key."""
    return (
        "-- users table\n"
        "CREATE TABLE `users` (\n"
        "  `id` INT AUTO_INCREMENT PRIMARY KEY,\n"
        "  `active` TINYINT(1) DEFAULT 1,\n"
        "  `status` ENUM('open','closed') NOT NULL DEFAULT 'open',\n"
        "  `name` VARCHAR(100) NOT NULL COMMENT 'display name'\n"
        ");"
    )
