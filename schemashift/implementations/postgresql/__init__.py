"""PostgreSQL emitter package."""

from .emitter import PostgreSQLEmitter

__all__ = [
    "PostgreSQLEmitter",
]
