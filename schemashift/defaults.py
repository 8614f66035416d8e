"""Column default normalization against a translated type."""

import re

from schemashift.catalog import TranslatedType
from schemashift.constants import KEYWORD_DEFAULTS
from schemashift.types import Dialect, TypeFamily

_FUNCTION_CALL = re.compile(r"^[A-Za-z_][\w.]*\s*\(.*\)$", re.DOTALL)
_BIT_LITERAL = re.compile(r"^[bB]'([01])'$")

_TRUE_LITERALS = frozenset({"true", "1", "t", "y", "yes", "on"})
_FALSE_LITERALS = frozenset({"false", "0", "f", "n", "no", "off"})


def _unquote(value: str) -> str:
    """Strip one level of single quotes and undo either escape style."""
    if len(value) >= 2 and value[0] == "'" and value[-1] == "'":
        inner = value[1:-1]
        return inner.replace("''", "'").replace("\\'", "'").replace("\\\\", "\\")
    # N'...' and E'...' prefixes
    if len(value) >= 3 and value[0] in "nNeE" and value[1] == "'" and value[-1] == "'":
        return _unquote(value[1:])
    return value


def _quote(value: str, dialect: Dialect) -> str:
    if dialect.is_mysql_family:
        escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    else:
        escaped = value.replace("'", "''")
    return f"'{escaped}'"


def _boolean_literal(value: str) -> bool | None:
    bit = _BIT_LITERAL.match(value)
    if bit:
        return bit.group(1) == "1"
    word = _unquote(value).strip().lower()
    if word in _TRUE_LITERALS:
        return True
    if word in _FALSE_LITERALS:
        return False
    return None


def _numeric(value: str, allowed: str) -> str | None:
    text = _unquote(value).strip()
    sign = "-" if text.startswith("-") else ""
    digits = "".join(char for char in text if char in allowed)
    if not digits or digits == ".":
        return None
    return sign + digits


def format_default(
    raw_default: str | None, target: TranslatedType, dialect: Dialect
) -> str | None:
    """Respell a raw default literal for the target dialect.

    Args:
        raw_default: Default as written in the source, quotes preserved
        target: The column's already-translated type
        dialect: Target dialect

    Returns:
        The literal to render after DEFAULT, or None to omit the clause
    """
    if raw_default is None:
        return None
    value = raw_default.strip()
    if not value or value.upper() == "NULL":
        return None

    if target.family == TypeFamily.BOOLEAN:
        flag = _boolean_literal(value)
        if flag is not None:
            if dialect in (Dialect.POSTGRESQL, Dialect.SQLSERVER):
                return "TRUE" if flag else "FALSE"
            return "1" if flag else "0"

    if value.upper() in KEYWORD_DEFAULTS:
        return value.upper()
    if _FUNCTION_CALL.match(value):
        if dialect == Dialect.SQLITE:
            return None
        return value

    if target.family == TypeFamily.INTEGER:
        return _numeric(value, "0123456789")
    if target.family == TypeFamily.FLOAT:
        return _numeric(value, "0123456789.")
    if target.family == TypeFamily.TEXT:
        return _quote(_unquote(value), dialect)

    return value
