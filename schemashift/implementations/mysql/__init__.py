"""MySQL and MariaDB emitter package."""

from .emitter import MariaDBEmitter, MySQLEmitter

__all__ = [
    "MySQLEmitter",
    "MariaDBEmitter",
]
