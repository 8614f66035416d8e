"""SQLite-specific DDL emitter."""

from schemashift.interfaces.emitter import DdlEmitter
from schemashift.quoting import quote_identifiers
from schemashift.schema import Column, UniqueConstraint
from schemashift.types import Dialect


class SQLiteEmitter(DdlEmitter):
    """SQLite-specific DDL emitter.

    Only a single-column integer key can autoincrement in SQLite, so the
    marker is tied to the inline primary key rather than the column flag.
    """

    dialect = Dialect.SQLITE

    def column_type(self, column: Column, inline_primary_key: bool) -> str:
        if inline_primary_key:
            return "INTEGER"
        return column.raw_type

    def auto_increment_marker(self, column: Column) -> str | None:
        return None

    def inline_primary_key_marker(self, column: Column) -> str:
        return "PRIMARY KEY AUTOINCREMENT"

    def unique_sql(self, constraint: UniqueConstraint) -> str | None:
        return f"UNIQUE ({quote_identifiers(constraint.columns, self.dialect)})"
