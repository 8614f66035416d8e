"""MySQL/MariaDB-specific DDL emitter."""

from schemashift.interfaces.emitter import DdlEmitter, index_name
from schemashift.quoting import quote_identifiers
from schemashift.schema import Column, Table, UniqueConstraint
from schemashift.types import Dialect


class MySQLEmitter(DdlEmitter):
    """MySQL-specific DDL emitter.

    Indexes are declared inside the table as KEY clauses and the table
    ends with the configured ENGINE and DEFAULT CHARSET.
    """

    dialect = Dialect.MYSQL

    def auto_increment_marker(self, column: Column) -> str | None:
        return "AUTO_INCREMENT" if column.is_auto_increment else None

    def comment_sql(self, column: Column) -> str | None:
        if not column.comment:
            return None
        escaped = column.comment.replace("\\", "\\\\").replace("'", "\\'")
        return f"COMMENT '{escaped}'"

    def unique_sql(self, constraint: UniqueConstraint) -> str | None:
        columns = quote_identifiers(constraint.columns, self.dialect)
        if constraint.name:
            return f"UNIQUE KEY {self.quote(constraint.name)} ({columns})"
        return f"UNIQUE KEY ({columns})"

    def inline_index_lines(self, table: Table) -> list[str]:
        return [
            f"KEY {self.quote(index_name(table, index))} "
            f"({quote_identifiers(index.columns, self.dialect)})"
            for index in table.indexes
        ]

    def index_statements(self, table: Table) -> list[str]:
        return []

    def table_suffix(self) -> str:
        return (
            f") ENGINE={self.settings.mysql_engine} "
            f"DEFAULT CHARSET={self.settings.mysql_charset};"
        )


class MariaDBEmitter(MySQLEmitter):
    """MariaDB shares every MySQL rendering rule."""

    dialect = Dialect.MARIADB
