"""SQL Server emitter package."""

from .emitter import SQLServerEmitter

__all__ = [
    "SQLServerEmitter",
]
