"""Per-dialect emitter implementations."""

from .factory import get_emitter
from .mysql import MariaDBEmitter, MySQLEmitter
from .postgresql import PostgreSQLEmitter
from .sqlite import SQLiteEmitter
from .sqlserver import SQLServerEmitter

__all__ = [
    "get_emitter",
    "MySQLEmitter",
    "MariaDBEmitter",
    "PostgreSQLEmitter",
    "SQLiteEmitter",
    "SQLServerEmitter",
]
