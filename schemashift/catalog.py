"""Column type catalog shared by all dialects.

Types are first reduced to a canonical, dialect-neutral key (``int``,
``varchar``, ``tinyint(1)``, ``timestamp with time zone``, ...) and then
looked up in one table per target dialect. Constructs a flat table cannot
express (booleans stored as ``tinyint(1)``, serial types, enum/set sizing,
exact numerics in SQLite) are resolved by special-case rules first.
"""

import re
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Final, Mapping

from schemashift.constants import DEFAULT_VARCHAR_LENGTH, ENUM_LENGTH_SLACK
from schemashift.log import get_logger
from schemashift.tokenizer import find_closing_paren, split_top_level
from schemashift.types import Dialect, TypeFamily

logger = get_logger(__name__)


@dataclass(frozen=True)
class TypeInfo:
    """A column type token broken into its parts."""

    raw_type: str
    base_type: str
    canonical: str
    length: int | None = None
    precision: int | None = None
    scale: int | None = None
    enum_values: tuple[str, ...] | None = None
    params: str | None = None
    unsigned: bool = False

    @property
    def is_serial(self) -> bool:
        return self.canonical in _SERIALS


@dataclass(frozen=True)
class TranslatedType:
    """Result of translating a type for a target dialect."""

    token: str
    canonical: str
    family: TypeFamily
    auto_increment: bool = False
    known: bool = True


_TYPE_HEAD = re.compile(
    r"\s*(?P<head>"
    r"double\s+precision"
    r"|national\s+character\s+varying"
    r"|national\s+character"
    r"|national\s+char"
    r"|character\s+varying"
    r"|char\s+varying"
    r"|bit\s+varying"
    r"|[A-Za-z_][A-Za-z0-9_]*"
    r")",
    re.IGNORECASE,
)
_TIME_ZONE = re.compile(r"\s*(with|without)\s+time\s+zone\b", re.IGNORECASE)
_TYPE_MODIFIER = re.compile(r"\s*(unsigned|signed|zerofill)\b", re.IGNORECASE)
_ARRAY_SUFFIX = re.compile(r"\s*(\[\s*\d*\s*\])+")

_ALIASES: Final[Mapping[str, str]] = MappingProxyType(
    {
        "integer": "int",
        "int4": "int",
        "int2": "smallint",
        "int8": "bigint",
        "int1": "tinyint",
        "bool": "boolean",
        "float4": "real",
        "float8": "double",
        "double precision": "double",
        "serial4": "serial",
        "serial8": "bigserial",
        "serial2": "smallserial",
        "character varying": "varchar",
        "char varying": "varchar",
        "national character varying": "varchar",
        "nvarchar": "varchar",
        "character": "char",
        "national character": "char",
        "national char": "char",
        "nchar": "char",
        "timestamptz": "timestamp with time zone",
        "timetz": "time",
        "time with time zone": "time",
        "time without time zone": "time",
        "datetime2": "datetime",
        "smalldatetime": "datetime",
        "datetimeoffset": "timestamp with time zone",
        "ntext": "text",
        "clob": "text",
        "uniqueidentifier": "uuid",
        "bytea": "blob",
        "image": "blob",
        "dec": "decimal",
        "fixed": "decimal",
        "smallmoney": "money",
    }
)

_FAMILIES: Final[Mapping[str, TypeFamily]] = MappingProxyType(
    {
        "tinyint(1)": TypeFamily.BOOLEAN,
        "boolean": TypeFamily.BOOLEAN,
        "tinyint": TypeFamily.INTEGER,
        "smallint": TypeFamily.INTEGER,
        "mediumint": TypeFamily.INTEGER,
        "int": TypeFamily.INTEGER,
        "bigint": TypeFamily.INTEGER,
        "serial": TypeFamily.INTEGER,
        "smallserial": TypeFamily.INTEGER,
        "bigserial": TypeFamily.INTEGER,
        "year": TypeFamily.INTEGER,
        "float": TypeFamily.FLOAT,
        "real": TypeFamily.FLOAT,
        "double": TypeFamily.FLOAT,
        "decimal": TypeFamily.FLOAT,
        "numeric": TypeFamily.FLOAT,
        "money": TypeFamily.FLOAT,
        "bit": TypeFamily.OTHER,
        "char": TypeFamily.TEXT,
        "varchar": TypeFamily.TEXT,
        "tinytext": TypeFamily.TEXT,
        "text": TypeFamily.TEXT,
        "mediumtext": TypeFamily.TEXT,
        "longtext": TypeFamily.TEXT,
        "enum": TypeFamily.TEXT,
        "set": TypeFamily.TEXT,
        "uuid": TypeFamily.TEXT,
        "xml": TypeFamily.TEXT,
        "date": TypeFamily.TEMPORAL,
        "time": TypeFamily.TEMPORAL,
        "datetime": TypeFamily.TEMPORAL,
        "timestamp": TypeFamily.TEMPORAL,
        "timestamp with time zone": TypeFamily.TEMPORAL,
        "timestamp without time zone": TypeFamily.TEMPORAL,
        "json": TypeFamily.JSON,
        "jsonb": TypeFamily.JSON,
        "binary": TypeFamily.BINARY,
        "varbinary": TypeFamily.BINARY,
        "tinyblob": TypeFamily.BINARY,
        "blob": TypeFamily.BINARY,
        "mediumblob": TypeFamily.BINARY,
        "longblob": TypeFamily.BINARY,
        "rowversion": TypeFamily.BINARY,
    }
)

_TO_MYSQL: Final[dict[str, str]] = {
    "tinyint(1)": "TINYINT(1)",
    "boolean": "TINYINT(1)",
    "tinyint": "TINYINT",
    "smallint": "SMALLINT",
    "mediumint": "MEDIUMINT",
    "int": "INT",
    "bigint": "BIGINT",
    "serial": "INT",
    "smallserial": "SMALLINT",
    "bigserial": "BIGINT",
    "year": "YEAR",
    "float": "FLOAT",
    "real": "DOUBLE",
    "double": "DOUBLE",
    "decimal": "DECIMAL",
    "numeric": "NUMERIC",
    "money": "DECIMAL(19,4)",
    "bit": "BIT",
    "char": "CHAR",
    "varchar": "VARCHAR",
    "tinytext": "TINYTEXT",
    "text": "TEXT",
    "mediumtext": "MEDIUMTEXT",
    "longtext": "LONGTEXT",
    "enum": "ENUM",
    "set": "SET",
    "uuid": "CHAR(36)",
    "xml": "TEXT",
    "date": "DATE",
    "time": "TIME",
    "datetime": "DATETIME",
    "timestamp": "TIMESTAMP",
    "timestamp with time zone": "TIMESTAMP",
    "timestamp without time zone": "DATETIME",
    "json": "JSON",
    "jsonb": "JSON",
    "binary": "BINARY",
    "varbinary": "VARBINARY",
    "tinyblob": "TINYBLOB",
    "blob": "BLOB",
    "mediumblob": "MEDIUMBLOB",
    "longblob": "LONGBLOB",
    "rowversion": "BINARY(8)",
}

_TO_POSTGRESQL: Final[dict[str, str]] = {
    "tinyint(1)": "BOOLEAN",
    "boolean": "BOOLEAN",
    "tinyint": "SMALLINT",
    "smallint": "SMALLINT",
    "mediumint": "INTEGER",
    "int": "INTEGER",
    "bigint": "BIGINT",
    "serial": "INTEGER",
    "smallserial": "SMALLINT",
    "bigserial": "BIGINT",
    "year": "INTEGER",
    "float": "REAL",
    "real": "REAL",
    "double": "DOUBLE PRECISION",
    "decimal": "DECIMAL",
    "numeric": "NUMERIC",
    "money": "MONEY",
    "bit": "BIT",
    "char": "CHARACTER",
    "varchar": "CHARACTER VARYING",
    "tinytext": "TEXT",
    "text": "TEXT",
    "mediumtext": "TEXT",
    "longtext": "TEXT",
    "enum": "CHARACTER VARYING",
    "set": "CHARACTER VARYING",
    "uuid": "UUID",
    "xml": "XML",
    "date": "DATE",
    "time": "TIME",
    "datetime": "TIMESTAMP WITHOUT TIME ZONE",
    "timestamp": "TIMESTAMP WITH TIME ZONE",
    "timestamp with time zone": "TIMESTAMP WITH TIME ZONE",
    "timestamp without time zone": "TIMESTAMP WITHOUT TIME ZONE",
    "json": "JSONB",
    "jsonb": "JSONB",
    "binary": "BYTEA",
    "varbinary": "BYTEA",
    "tinyblob": "BYTEA",
    "blob": "BYTEA",
    "mediumblob": "BYTEA",
    "longblob": "BYTEA",
    "rowversion": "BYTEA",
}

_TO_SQLITE: Final[dict[str, str]] = {
    "tinyint(1)": "INTEGER",
    "boolean": "INTEGER",
    "tinyint": "INTEGER",
    "smallint": "INTEGER",
    "mediumint": "INTEGER",
    "int": "INTEGER",
    "bigint": "INTEGER",
    "serial": "INTEGER",
    "smallserial": "INTEGER",
    "bigserial": "INTEGER",
    "year": "INTEGER",
    "float": "REAL",
    "real": "REAL",
    "double": "REAL",
    "decimal": "REAL",
    "numeric": "REAL",
    "money": "REAL",
    "bit": "INTEGER",
    "char": "NVARCHAR",
    "varchar": "NVARCHAR",
    "tinytext": "TEXT",
    "text": "TEXT",
    "mediumtext": "TEXT",
    "longtext": "TEXT",
    "enum": "NVARCHAR",
    "set": "NVARCHAR",
    "uuid": "TEXT",
    "xml": "TEXT",
    "date": "DATE",
    "time": "TIME",
    "datetime": "DATETIME",
    "timestamp": "TIMESTAMP",
    "timestamp with time zone": "TIMESTAMP",
    "timestamp without time zone": "DATETIME",
    "json": "TEXT",
    "jsonb": "TEXT",
    "binary": "BLOB",
    "varbinary": "BLOB",
    "tinyblob": "BLOB",
    "blob": "BLOB",
    "mediumblob": "BLOB",
    "longblob": "BLOB",
    "rowversion": "BLOB",
}

# SQL Server starts from the MySQL spellings
_SQLSERVER_OVERRIDES: Final[dict[str, str]] = {
    "boolean": "BIT",
    "mediumint": "INT",
    "year": "SMALLINT",
    "real": "REAL",
    "double": "FLOAT",
    "money": "MONEY",
    "char": "NCHAR",
    "varchar": "NVARCHAR",
    "tinytext": "NVARCHAR(255)",
    "text": "NVARCHAR(MAX)",
    "mediumtext": "NVARCHAR(MAX)",
    "longtext": "NVARCHAR(MAX)",
    "enum": "NVARCHAR",
    "set": "NVARCHAR",
    "uuid": "UNIQUEIDENTIFIER",
    "xml": "XML",
    "datetime": "DATETIME2",
    "timestamp": "DATETIME2",
    "timestamp with time zone": "DATETIMEOFFSET",
    "timestamp without time zone": "DATETIME2",
    "json": "NVARCHAR(MAX)",
    "jsonb": "NVARCHAR(MAX)",
    "tinyblob": "VARBINARY(MAX)",
    "blob": "VARBINARY(MAX)",
    "mediumblob": "VARBINARY(MAX)",
    "longblob": "VARBINARY(MAX)",
    "rowversion": "ROWVERSION",
}

TYPE_MAPS: Final[Mapping[Dialect, Mapping[str, str]]] = MappingProxyType(
    {
        Dialect.MYSQL: MappingProxyType(_TO_MYSQL),
        Dialect.MARIADB: MappingProxyType(_TO_MYSQL),
        Dialect.POSTGRESQL: MappingProxyType(_TO_POSTGRESQL),
        Dialect.SQLITE: MappingProxyType(_TO_SQLITE),
        Dialect.SQLSERVER: MappingProxyType({**_TO_MYSQL, **_SQLSERVER_OVERRIDES}),
    }
)

# Target tokens that take a (length) or (precision, scale) suffix
_PARAMETERIZED_TOKENS: Final[frozenset[str]] = frozenset(
    {
        "CHAR",
        "NCHAR",
        "CHARACTER",
        "VARCHAR",
        "NVARCHAR",
        "CHARACTER VARYING",
        "BINARY",
        "VARBINARY",
        "DECIMAL",
        "NUMERIC",
    }
)
_VARYING_TOKENS: Final[frozenset[str]] = frozenset({"VARCHAR", "NVARCHAR", "VARBINARY"})
_EXACT_NUMERICS: Final[frozenset[str]] = frozenset(
    {"decimal", "numeric", "float", "double", "real", "money"}
)
_SERIALS: Final[frozenset[str]] = frozenset({"serial", "smallserial", "bigserial"})
_ENUMS: Final[frozenset[str]] = frozenset({"enum", "set"})


def split_type(text: str) -> tuple[str, str]:
    """Split a column definition tail into its type token and the rest.

    Args:
        text: Text following the column name, e.g. "decimal(10,2) NOT NULL"

    Returns:
        (type token, remaining constraint text)
    """
    match = _TYPE_HEAD.match(text)
    if not match:
        return "", text.strip()
    end = match.end()

    # parameter list, possibly holding quoted literals with parentheses
    probe = end
    while probe < len(text) and text[probe].isspace():
        probe += 1
    if probe < len(text) and text[probe] == "(":
        close = find_closing_paren(text, probe)
        end = len(text) if close == -1 else close + 1

    for pattern in (_TIME_ZONE, _ARRAY_SUFFIX):
        suffix = pattern.match(text, end)
        if suffix:
            end = suffix.end()

    modifier = _TYPE_MODIFIER.match(text, end)
    while modifier:
        end = modifier.end()
        modifier = _TYPE_MODIFIER.match(text, end)

    return text[:end].strip(), text[end:].strip()


def _unquote_literal(literal: str) -> str:
    literal = literal.strip()
    if len(literal) >= 2 and literal[0] == literal[-1] and literal[0] in "'\"":
        quote = literal[0]
        inner = literal[1:-1]
        return inner.replace(quote * 2, quote).replace("\\" + quote, quote)
    return literal


def _to_int(value: str) -> int | None:
    value = value.strip()
    return int(value) if value.isdigit() else None


class TypeCatalog:
    """Per-dialect type lookup with special-case rules.

    The mapping tables are module-level constants shared by every
    instance; an instance only carries the configurable defaults.
    """

    def __init__(
        self,
        varchar_default_length: int = DEFAULT_VARCHAR_LENGTH,
        warn_on_unknown_type: bool = True,
    ) -> None:
        self.varchar_default_length = varchar_default_length
        self.warn_on_unknown_type = warn_on_unknown_type

    def type_info_for(self, raw_type: str, dialect: Dialect) -> TypeInfo:
        """Parse a type token written for `dialect`.

        Args:
            raw_type: Type token such as "varchar(255)" or "enum('a','b')"
            dialect: Dialect the token was written for

        Returns:
            Parsed type with its canonical key
        """
        token, _ = split_type(raw_type)
        if not token:
            token = raw_type.strip()

        head = _TYPE_HEAD.match(token)
        base = " ".join(head.group("head").lower().split()) if head else token.lower()
        rest = token[head.end() :] if head else ""

        params: str | None = None
        stripped = rest.lstrip()
        if stripped.startswith("("):
            close = find_closing_paren(stripped, 0)
            params = stripped[1:close] if close != -1 else stripped[1:]
            rest = stripped[close + 1 :] if close != -1 else ""

        time_zone = _TIME_ZONE.search(rest)
        if time_zone:
            base = f"{base} {time_zone.group(1).lower()} time zone"
        if _ARRAY_SUFFIX.search(rest):
            base = f"{base}[]"
        unsigned = bool(re.search(r"\bunsigned\b", rest, re.IGNORECASE))

        length = precision = scale = None
        enum_values: tuple[str, ...] | None = None
        parts = split_top_level(params) if params is not None else []

        if base in _ENUMS:
            enum_values = tuple(_unquote_literal(part) for part in parts)
        elif parts:
            first = _to_int(parts[0])
            second = _to_int(parts[1]) if len(parts) > 1 else None
            if _ALIASES.get(base, base) in _EXACT_NUMERICS:
                precision, scale = first, second
            else:
                length = first

        info = TypeInfo(
            raw_type=token,
            base_type=base,
            canonical=base,
            length=length,
            precision=precision,
            scale=scale,
            enum_values=enum_values,
            params=params,
            unsigned=unsigned,
        )
        return replace(info, canonical=self.canonical_type(info, dialect))

    def canonical_type(self, info: TypeInfo, dialect: Dialect) -> str:
        """Reduce a parsed type to its dialect-neutral catalog key."""
        base = info.base_type
        if dialect == Dialect.SQLSERVER:
            if base == "bit":
                return "boolean"
            if base in ("timestamp", "rowversion"):
                return "rowversion"

        canonical = _ALIASES.get(base, base)
        if canonical == "tinyint" and info.length == 1:
            return "tinyint(1)"
        if info.params is not None and info.params.strip().lower() == "max":
            if canonical == "varchar":
                return "text"
            if canonical == "varbinary":
                return "blob"
        return canonical

    def family_of(self, canonical: str) -> TypeFamily:
        return _FAMILIES.get(canonical, TypeFamily.OTHER)

    def is_known(self, canonical: str) -> bool:
        """Whether any target table maps the canonical key."""
        return any(canonical in table for table in TYPE_MAPS.values())

    def translate(
        self, info: TypeInfo, source: Dialect, target: Dialect
    ) -> TranslatedType:
        """Translate a parsed type to the target dialect.

        Never raises: a type missing from the catalog is returned
        upper-cased, verbatim.
        """
        canonical = info.canonical
        family = self.family_of(canonical)
        target_map = TYPE_MAPS[target]

        # enum/set become sized text outside MySQL
        if canonical in _ENUMS:
            return TranslatedType(
                token=self._enum_token(info, target),
                canonical=canonical,
                family=family,
            )

        if canonical not in target_map:
            token = " ".join(info.raw_type.split()).upper()
            if self.warn_on_unknown_type:
                logger.warning(
                    f"No {target.value} mapping for {source.value} type "
                    f"'{info.raw_type}', keeping {token}"
                )
            return TranslatedType(
                token=token, canonical=canonical, family=family, known=False
            )

        token = self._with_params(target_map[canonical], info, target)
        if (
            target.is_mysql_family
            and info.unsigned
            and family in (TypeFamily.INTEGER, TypeFamily.FLOAT)
        ):
            token = f"{token} UNSIGNED"

        return TranslatedType(
            token=token,
            canonical=canonical,
            family=family,
            auto_increment=canonical in _SERIALS,
        )

    def _enum_token(self, info: TypeInfo, target: Dialect) -> str:
        if target.is_mysql_family:
            return f"{info.canonical.upper()}({info.params or ''})"
        values = info.enum_values or ()
        size = max((len(value) for value in values), default=0) + ENUM_LENGTH_SLACK
        return f"{TYPE_MAPS[target][info.canonical]}({size})"

    def _with_params(self, token: str, info: TypeInfo, target: Dialect) -> str:
        if token not in _PARAMETERIZED_TOKENS:
            return token
        if token in ("DECIMAL", "NUMERIC"):
            if info.precision is None:
                return token
            if info.scale is None:
                return f"{token}({info.precision})"
            return f"{token}({info.precision},{info.scale})"
        if info.length is not None:
            return f"{token}({info.length})"
        if token in _VARYING_TOKENS and (
            target.is_mysql_family or target == Dialect.SQLSERVER
        ):
            return f"{token}({self.varchar_default_length})"
        return token


_default_catalog = TypeCatalog()


def type_info_for(raw_type: str, dialect: Dialect) -> TypeInfo:
    return _default_catalog.type_info_for(raw_type, dialect)


def canonical_type(info: TypeInfo, dialect: Dialect) -> str:
    return _default_catalog.canonical_type(info, dialect)


def translate_type(info: TypeInfo, source: Dialect, target: Dialect) -> TranslatedType:
    return _default_catalog.translate(info, source, target)
