"""PostgreSQL-specific DDL emitter."""

from schemashift.interfaces.emitter import DdlEmitter
from schemashift.quoting import quote_identifiers
from schemashift.schema import Column, UniqueConstraint
from schemashift.types import Dialect


class PostgreSQLEmitter(DdlEmitter):
    """PostgreSQL-specific DDL emitter."""

    dialect = Dialect.POSTGRESQL

    def column_type(self, column: Column, inline_primary_key: bool) -> str:
        """Auto-increment columns become SERIAL or BIGSERIAL."""
        if not column.is_auto_increment:
            return column.raw_type
        if column.raw_type.upper().startswith("BIGINT"):
            return "BIGSERIAL"
        return "SERIAL"

    def auto_increment_marker(self, column: Column) -> str | None:
        return None

    def unique_sql(self, constraint: UniqueConstraint) -> str | None:
        columns = quote_identifiers(constraint.columns, self.dialect)
        if constraint.name:
            return f"CONSTRAINT {self.quote(constraint.name)} UNIQUE ({columns})"
        return f"UNIQUE ({columns})"
