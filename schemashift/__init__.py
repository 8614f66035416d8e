"""Translate CREATE TABLE statements between SQL dialects."""

from .catalog import (
    TranslatedType,
    TypeCatalog,
    TypeInfo,
    canonical_type,
    translate_type,
    type_info_for,
)
from .config import Settings, settings
from .exceptions import ConversionError, ParseError, UnsupportedDialectError
from .log import (
    get_logger,
    setup_logging,
    setup_production_logging,
    setup_test_logging,
)
from .parser import DdlParser, parse
from .schema import Column, IndexDefinition, Table, UniqueConstraint
from .translator import (
    DialectTranslator,
    DumpTranslation,
    StatementError,
    convert_type,
    translate_create_table,
    translate_dump,
)
from .types import Dialect, Environment, TypeFamily, normalize_dialect
from .values import build_values_clause, python_type_for, to_sql_literal

__all__ = [
    "Dialect",
    "Environment",
    "TypeFamily",
    "normalize_dialect",
    "Settings",
    "settings",
    "get_logger",
    "setup_logging",
    "setup_production_logging",
    "setup_test_logging",
    "ConversionError",
    "ParseError",
    "UnsupportedDialectError",
    "Column",
    "IndexDefinition",
    "Table",
    "UniqueConstraint",
    "TypeCatalog",
    "TypeInfo",
    "TranslatedType",
    "type_info_for",
    "canonical_type",
    "translate_type",
    "DdlParser",
    "parse",
    "DialectTranslator",
    "DumpTranslation",
    "StatementError",
    "translate_create_table",
    "translate_dump",
    "convert_type",
    "python_type_for",
    "to_sql_literal",
    "build_values_clause",
]
