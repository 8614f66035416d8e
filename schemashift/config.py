"""Configuration management for the schemashift system."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from schemashift.constants import (
    DEFAULT_MYSQL_CHARSET,
    DEFAULT_MYSQL_ENGINE,
    DEFAULT_VARCHAR_LENGTH,
)
from schemashift.types import Environment


class Settings(BaseModel):
    """Translation settings."""

    # Environment
    version: str = Field(default="0.1.0", description="Library version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Runtime environment (development/production/testing)",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # MySQL output
    mysql_engine: str = Field(
        default=DEFAULT_MYSQL_ENGINE,
        description="Storage engine appended to MySQL/MariaDB CREATE TABLE",
    )
    mysql_charset: str = Field(
        default=DEFAULT_MYSQL_CHARSET,
        description="Default charset appended to MySQL/MariaDB CREATE TABLE",
    )

    # Type mapping
    varchar_default_length: int = Field(
        default=DEFAULT_VARCHAR_LENGTH,
        gt=0,
        description="Length for VARCHAR/NVARCHAR targets that require one",
    )
    warn_on_unknown_type: bool = Field(
        default=True,
        description="Log a warning when a type has no catalog entry",
    )

    # Indexes
    emit_indexes: bool = Field(
        default=True,
        description="Render plain KEY/INDEX clauses for the target dialect",
    )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == Environment.TESTING


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ["true", "1", "yes", "on"]


def load_settings() -> Settings:
    """Load settings from environment variables."""

    # Load .env file if it exists
    load_dotenv()

    return Settings(
        environment=Environment(os.getenv("SCHEMASHIFT_ENV", "development")),
        log_level=os.getenv("SCHEMASHIFT_LOG_LEVEL", "INFO").upper(),
        mysql_engine=os.getenv("SCHEMASHIFT_MYSQL_ENGINE", DEFAULT_MYSQL_ENGINE),
        mysql_charset=os.getenv("SCHEMASHIFT_MYSQL_CHARSET", DEFAULT_MYSQL_CHARSET),
        varchar_default_length=int(
            os.getenv(
                "SCHEMASHIFT_VARCHAR_DEFAULT_LENGTH", str(DEFAULT_VARCHAR_LENGTH)
            )
        ),
        warn_on_unknown_type=_env_flag("SCHEMASHIFT_WARN_ON_UNKNOWN_TYPE", "true"),
        emit_indexes=_env_flag("SCHEMASHIFT_EMIT_INDEXES", "true"),
    )


# Global settings instance
settings = load_settings()
