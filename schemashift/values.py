"""Conversion of Python values to SQL literals for INSERT rows."""

import json
from collections.abc import Mapping
from typing import Any

from schemashift.catalog import TypeCatalog
from schemashift.exceptions import ConversionError
from schemashift.types import Dialect, TypeFamily

_catalog = TypeCatalog(warn_on_unknown_type=False)

_PYTHON_TYPES = {
    TypeFamily.BOOLEAN: "bool",
    TypeFamily.INTEGER: "int",
    TypeFamily.FLOAT: "float",
    TypeFamily.JSON: "dict",
}

_TRUE_WORDS = frozenset({"true", "1", "t", "y", "yes", "on"})
_FALSE_WORDS = frozenset({"false", "0", "f", "n", "no", "off"})


def _family(sql_type: str, dialect: Dialect) -> TypeFamily:
    info = _catalog.type_info_for(sql_type, dialect)
    return _catalog.family_of(info.canonical)


def python_type_for(sql_type: str, dialect: Dialect = Dialect.MYSQL) -> str:
    """Name of the Python type that holds values of a column type.

    Args:
        sql_type: Column type token, e.g. "tinyint(1)" or "jsonb"
        dialect: Dialect the token is written in

    Returns:
        One of "bool", "int", "float", "dict" or "str"
    """
    return _PYTHON_TYPES.get(_family(sql_type, dialect), "str")


def _quote(text: str) -> str:
    return "'" + text.replace("'", "''") + "'"


def _as_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    word = str(value).strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    return None


def to_sql_literal(value: Any, sql_type: str, dialect: Dialect) -> str:
    """Render a Python value as a SQL literal for a column type.

    Raises:
        ConversionError: If a numeric column gets a non-numeric value
    """
    if value is None:
        return "NULL"

    family = _family(sql_type, dialect)
    if family == TypeFamily.BOOLEAN:
        flag = _as_bool(value)
        if flag is None:
            return "NULL"
        if dialect == Dialect.SQLITE:
            return "1" if flag else "0"
        return "TRUE" if flag else "FALSE"

    try:
        if family == TypeFamily.INTEGER:
            return str(int(value))
        if family == TypeFamily.FLOAT:
            return repr(float(value))
    except (TypeError, ValueError) as e:
        raise ConversionError(f"Cannot store {value!r} in a {sql_type} column") from e

    if family == TypeFamily.JSON and not isinstance(value, str):
        return _quote(json.dumps(value))
    if isinstance(value, (bytes, bytearray)):
        return _quote(bytes(value).decode("utf-8", errors="replace"))
    return _quote(str(value))


def build_values_clause(
    row: Mapping[str, Any], column_types: Mapping[str, str], dialect: Dialect
) -> str | None:
    """Render one row as a VALUES tuple.

    Columns missing from column_types are treated as text.

    Returns:
        "(v1, v2, ...)" in row order, or None for an empty row
    """
    if not row:
        return None
    literals = [
        to_sql_literal(value, column_types.get(name, "text"), dialect)
        for name, value in row.items()
    ]
    return "(" + ", ".join(literals) + ")"
