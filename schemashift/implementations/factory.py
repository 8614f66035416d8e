"""Emitter selection by dialect."""

from schemashift.config import Settings
from schemashift.interfaces.emitter import DdlEmitter
from schemashift.log import get_logger
from schemashift.types import Dialect, normalize_dialect

from .mysql import MariaDBEmitter, MySQLEmitter
from .postgresql import PostgreSQLEmitter
from .sqlite import SQLiteEmitter
from .sqlserver import SQLServerEmitter

logger = get_logger(__name__)


def get_emitter(dialect: Dialect | str, config: Settings | None = None) -> DdlEmitter:
    """Get the emitter for a dialect.

    Args:
        dialect: Dialect member or alias
        config: Settings for the emitter, the global settings if omitted

    Returns:
        Emitter instance

    Raises:
        UnsupportedDialectError: If the dialect tag is unknown
    """
    match normalize_dialect(dialect):
        case Dialect.MYSQL:
            emitter: DdlEmitter = MySQLEmitter(config)
        case Dialect.MARIADB:
            emitter = MariaDBEmitter(config)
        case Dialect.POSTGRESQL:
            emitter = PostgreSQLEmitter(config)
        case Dialect.SQLITE:
            emitter = SQLiteEmitter(config)
        case Dialect.SQLSERVER:
            emitter = SQLServerEmitter(config)
    logger.debug(f"Selected {type(emitter).__name__}")
    return emitter
