"""Abstract source of live column metadata."""

from abc import ABC, abstractmethod

from schemashift.exceptions import ConversionError
from schemashift.schema import Column, Table


class ColumnMetadataSource(ABC):
    """Capability that lists the columns of an existing table.

    Implementations talk to a live database; the translator itself never
    calls one. Use build_table() to turn the listing into a Table.
    """

    @abstractmethod
    def list_columns(self, table_name: str) -> list[Column]:
        """List the columns of a table in declaration order.

        Args:
            table_name: Name of the table

        Returns:
            Columns with raw_type written in the source's dialect
        """
        pass


def build_table(source: ColumnMetadataSource, table_name: str) -> Table:
    """Build a Table from a metadata source.

    Columns flagged is_primary_key form the primary key, in order.

    Raises:
        ConversionError: If the source reports no columns or repeats one
    """
    columns = source.list_columns(table_name)
    if not columns:
        raise ConversionError(f"No columns reported for table {table_name}")

    table = Table(name=table_name)
    for column in columns:
        try:
            table.add_column(column)
        except ValueError as e:
            raise ConversionError(str(e)) from e
    for column in columns:
        if column.is_primary_key:
            table.add_primary_key(column.name)
    return table
