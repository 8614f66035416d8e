"""Dialect-neutral table model produced by the parser and consumed by emitters."""

from dataclasses import dataclass, field


@dataclass
class Column:
    """Column definition."""

    name: str
    raw_type: str
    base_type: str = ""
    length: int | None = None
    precision: int | None = None
    scale: int | None = None
    enum_values: list[str] | None = None
    nullable: bool = True
    default_value: str | None = None
    is_primary_key: bool = False
    is_auto_increment: bool = False
    unsigned: bool = False
    comment: str | None = None
    on_update: str | None = None


@dataclass
class UniqueConstraint:
    """Unique constraint over one or more columns."""

    columns: list[str]
    name: str | None = None


@dataclass
class IndexDefinition:
    """Plain (non-unique) index declared inside CREATE TABLE."""

    columns: list[str]
    name: str | None = None


@dataclass
class Table:
    """Table definition."""

    name: str
    columns: list[Column] = field(default_factory=list)
    primary_key: list[str] = field(default_factory=list)
    unique_constraints: list[UniqueConstraint] = field(default_factory=list)
    indexes: list[IndexDefinition] = field(default_factory=list)
    extra_clauses: list[str] = field(default_factory=list)
    drop_if_exists: bool = False

    def get_column(self, name: str) -> Column | None:
        """Find a column by name, case-insensitively."""
        wanted = name.lower()
        for column in self.columns:
            if column.name.lower() == wanted:
                return column
        return None

    def has_column(self, name: str) -> bool:
        return self.get_column(name) is not None

    def add_column(self, column: Column) -> None:
        """Append a column, keeping declaration order.

        Raises:
            ValueError: If a column with the same name already exists
        """
        if self.has_column(column.name):
            raise ValueError(f"Duplicate column: {column.name}")
        self.columns.append(column)

    def add_primary_key(self, name: str) -> None:
        """Add a column to the primary key; repeated names are ignored."""
        column = self.get_column(name)
        if column is not None:
            name = column.name
            column.is_primary_key = True
            column.nullable = False
        if name.lower() not in (key.lower() for key in self.primary_key):
            self.primary_key.append(name)

    @property
    def inline_primary_key(self) -> Column | None:
        """The single auto-increment key column rendered inline, if any.

        Composite keys and non auto-increment keys are rendered as a
        trailing PRIMARY KEY clause instead.
        """
        if len(self.primary_key) != 1:
            return None
        column = self.get_column(self.primary_key[0])
        if column is None or not column.is_auto_increment:
            return None
        return column
