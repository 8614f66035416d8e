"""SQL Server-specific DDL emitter."""

from schemashift.interfaces.emitter import DdlEmitter
from schemashift.schema import Column, UniqueConstraint
from schemashift.types import Dialect


class SQLServerEmitter(DdlEmitter):
    """SQL Server-specific DDL emitter."""

    dialect = Dialect.SQLSERVER

    def auto_increment_marker(self, column: Column) -> str | None:
        return "IDENTITY(1,1)" if column.is_auto_increment else None

    def unique_sql(self, constraint: UniqueConstraint) -> str | None:
        # no agreed spelling yet, see DESIGN.md
        return None
