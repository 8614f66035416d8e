"""Abstract DDL emitter interface for different SQL dialects."""

from abc import ABC, abstractmethod

from schemashift.config import Settings, settings
from schemashift.constants import COLUMN_INDENT, LINE_SEPARATOR
from schemashift.quoting import quote_identifier, quote_identifiers
from schemashift.schema import Column, IndexDefinition, Table, UniqueConstraint
from schemashift.types import Dialect


class DdlEmitter(ABC):
    """Render a translated Table as CREATE TABLE text for one dialect.

    Column types and defaults must already be spelled for the target;
    the emitter only lays them out. Emitting never fails.
    """

    dialect: Dialect

    def __init__(self, config: Settings | None = None) -> None:
        self.settings = config or settings

    def quote(self, name: str) -> str:
        return quote_identifier(name, self.dialect)

    def emit(self, table: Table) -> str:
        """Generate CREATE TABLE SQL.

        Args:
            table: Table with target-dialect column types

        Returns:
            CREATE TABLE statement, followed by CREATE INDEX statements
            for dialects that cannot declare indexes inline
        """
        inline = table.inline_primary_key
        lines = [
            self.column_sql(column, column is inline) for column in table.columns
        ]

        if table.primary_key and inline is None:
            columns = quote_identifiers(table.primary_key, self.dialect)
            lines.append(f"PRIMARY KEY ({columns})")
        for constraint in table.unique_constraints:
            unique = self.unique_sql(constraint)
            if unique is not None:
                lines.append(unique)
        lines.extend(self.inline_index_lines(table))
        lines.extend(table.extra_clauses)

        body = f",{LINE_SEPARATOR}".join(f"{COLUMN_INDENT}{line}" for line in lines)
        sql = (
            f"CREATE TABLE {self.quote(table.name)} ({LINE_SEPARATOR}"
            f"{body}{LINE_SEPARATOR}{self.table_suffix()}"
        )

        statements = [sql, *self.index_statements(table)]
        return LINE_SEPARATOR.join(statements)

    def column_sql(self, column: Column, inline_primary_key: bool) -> str:
        """Render one column line.

        Args:
            column: Column with its translated type in raw_type
            inline_primary_key: Whether the column carries PRIMARY KEY inline

        Returns:
            Column definition without indentation
        """
        parts = [self.quote(column.name), self.column_type(column, inline_primary_key)]

        marker = self.auto_increment_marker(column)
        if marker:
            parts.append(marker)
        if inline_primary_key:
            parts.append(self.inline_primary_key_marker(column))

        parts.append("NOT NULL" if not column.nullable else "NULL")
        if column.default_value is not None and not column.is_auto_increment:
            parts.append(f"DEFAULT {column.default_value}")

        comment = self.comment_sql(column)
        if comment:
            parts.append(comment)
        return " ".join(parts)

    def column_type(self, column: Column, inline_primary_key: bool) -> str:
        return column.raw_type

    @abstractmethod
    def auto_increment_marker(self, column: Column) -> str | None:
        """Keyword placed after the type of an auto-increment column."""
        pass

    def inline_primary_key_marker(self, column: Column) -> str:
        return "PRIMARY KEY"

    def comment_sql(self, column: Column) -> str | None:
        return None

    @abstractmethod
    def unique_sql(self, constraint: UniqueConstraint) -> str | None:
        """Render a unique constraint line, or None to leave it out."""
        pass

    def inline_index_lines(self, table: Table) -> list[str]:
        return []

    def index_statements(self, table: Table) -> list[str]:
        """CREATE INDEX statements emitted after the table."""
        if not self.settings.emit_indexes:
            return []
        return [
            self.create_index_sql(table.name, index_name(table, index), index.columns)
            for index in table.indexes
        ]

    def table_suffix(self) -> str:
        return ");"

    def create_index_sql(
        self, table_name: str, index_name: str, columns: list[str]
    ) -> str:
        """Generate CREATE INDEX SQL.

        Args:
            table_name: Name of the table
            index_name: Name of the index
            columns: List of column names to index

        Returns:
            CREATE INDEX SQL statement
        """
        return (
            f"CREATE INDEX {self.quote(index_name)} ON {self.quote(table_name)} "
            f"({quote_identifiers(columns, self.dialect)});"
        )

    def drop_table_comment(self, table_name: str) -> str:
        """Commented-out DROP TABLE line placed before a translated table."""
        return f"-- DROP TABLE IF EXISTS {self.quote(table_name)};"


def index_name(table: Table, index: IndexDefinition) -> str:
    """Name of an index, derived from table and columns when unnamed."""
    if index.name:
        return index.name
    return "_".join(["idx", table.name, *index.columns])
