"""SQLite emitter package."""

from .emitter import SQLiteEmitter

__all__ = [
    "SQLiteEmitter",
]
