"""Common type definitions for the schemashift system."""

from enum import Enum

from schemashift.exceptions import UnsupportedDialectError


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class Dialect(str, Enum):
    """Supported SQL dialects."""

    MYSQL = "mysql"
    MARIADB = "mariadb"
    POSTGRESQL = "postgresql"
    SQLITE = "sqlite"
    SQLSERVER = "sqlserver"

    @property
    def is_mysql_family(self) -> bool:
        """MySQL and MariaDB share one rule-set."""
        return self in (Dialect.MYSQL, Dialect.MARIADB)


class TypeFamily(str, Enum):
    """Semantic family of a column type."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"
    TEMPORAL = "temporal"
    BINARY = "binary"
    JSON = "json"
    OTHER = "other"


DIALECT_ALIASES: dict[str, Dialect] = {
    "mysql": Dialect.MYSQL,
    "mariadb": Dialect.MARIADB,
    "postgresql": Dialect.POSTGRESQL,
    "postgres": Dialect.POSTGRESQL,
    "pgsql": Dialect.POSTGRESQL,
    "sqlite": Dialect.SQLITE,
    "sqlite3": Dialect.SQLITE,
    "sqlserver": Dialect.SQLSERVER,
    "mssql": Dialect.SQLSERVER,
    "sqlsrv": Dialect.SQLSERVER,
}


def normalize_dialect(dialect: Dialect | str) -> Dialect:
    """Resolve a dialect tag or alias to a Dialect.

    Args:
        dialect: Dialect member or case-insensitive alias (e.g. 'pgsql')

    Returns:
        Matching Dialect

    Raises:
        UnsupportedDialectError: If the tag is unknown
    """
    if isinstance(dialect, Dialect):
        return dialect
    if not isinstance(dialect, str):
        raise UnsupportedDialectError(str(dialect))

    key = dialect.strip().lower()
    if key not in DIALECT_ALIASES:
        raise UnsupportedDialectError(dialect)
    return DIALECT_ALIASES[key]
