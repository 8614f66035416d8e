"""Tests for the column type catalog."""

import logging

import pytest

from schemashift.catalog import TypeCatalog, split_type
from schemashift.types import Dialect, TypeFamily


@pytest.fixture
def catalog() -> TypeCatalog:
    """Create a catalog with default settings."""
    return TypeCatalog()


def convert(catalog: TypeCatalog, token: str, source: Dialect, target: Dialect) -> str:
    info = catalog.type_info_for(token, source)
    return catalog.translate(info, source, target).token


def test_split_type() -> None:
    """Test separating the type token from column constraints."""
    assert split_type("decimal(10,2) NOT NULL") == ("decimal(10,2)", "NOT NULL")
    assert split_type("int(10) unsigned zerofill DEFAULT 0") == (
        "int(10) unsigned zerofill",
        "DEFAULT 0",
    )
    assert split_type("timestamp(3) with time zone DEFAULT now()") == (
        "timestamp(3) with time zone",
        "DEFAULT now()",
    )
    assert split_type("character varying(20)") == ("character varying(20)", "")
    assert split_type("enum('a)','b') NULL") == ("enum('a)','b')", "NULL")


def test_type_info_for_parameters(catalog: TypeCatalog) -> None:
    """Test parsing of lengths, precision and enum literals."""
    decimal = catalog.type_info_for("DECIMAL(10, 2)", Dialect.MYSQL)
    assert decimal.base_type == "decimal"
    assert (decimal.precision, decimal.scale) == (10, 2)
    assert decimal.length is None

    varchar = catalog.type_info_for("varchar(255)", Dialect.MYSQL)
    assert varchar.length == 255
    assert varchar.canonical == "varchar"

    enum = catalog.type_info_for("enum('a,b','it''s')", Dialect.MYSQL)
    assert enum.enum_values == ("a,b", "it's")

    unsigned = catalog.type_info_for("int(11) unsigned", Dialect.MYSQL)
    assert unsigned.unsigned is True
    assert unsigned.length == 11


@pytest.mark.parametrize(
    "token, dialect, canonical",
    [
        ("int4", Dialect.POSTGRESQL, "int"),
        ("bool", Dialect.POSTGRESQL, "boolean"),
        ("timestamptz", Dialect.POSTGRESQL, "timestamp with time zone"),
        ("timestamp", Dialect.POSTGRESQL, "timestamp"),
        ("timestamp without time zone", Dialect.POSTGRESQL, "timestamp without time zone"),
        ("timestamp", Dialect.MYSQL, "timestamp"),
        ("tinyint(1)", Dialect.MYSQL, "tinyint(1)"),
        ("tinyint(4)", Dialect.MYSQL, "tinyint"),
        ("bit", Dialect.SQLSERVER, "boolean"),
        ("nvarchar(max)", Dialect.SQLSERVER, "text"),
        ("varbinary(max)", Dialect.SQLSERVER, "blob"),
        ("uniqueidentifier", Dialect.SQLSERVER, "uuid"),
        ("double precision", Dialect.POSTGRESQL, "double"),
        ("bytea", Dialect.POSTGRESQL, "blob"),
    ],
)
def test_canonical_type(
    catalog: TypeCatalog, token: str, dialect: Dialect, canonical: str
) -> None:
    """Test alias collapsing to canonical keys."""
    assert catalog.type_info_for(token, dialect).canonical == canonical


@pytest.mark.parametrize(
    "target, expected",
    [
        (Dialect.POSTGRESQL, "BOOLEAN"),
        (Dialect.SQLITE, "INTEGER"),
        (Dialect.MARIADB, "TINYINT(1)"),
        (Dialect.SQLSERVER, "TINYINT(1)"),
    ],
)
def test_tinyint_one_is_boolean(
    catalog: TypeCatalog, target: Dialect, expected: str
) -> None:
    """Test the tinyint(1) special case."""
    assert convert(catalog, "TINYINT(1)", Dialect.MYSQL, target) == expected


def test_serial_sets_auto_increment(catalog: TypeCatalog) -> None:
    """Test that serial types become integers plus auto-increment."""
    info = catalog.type_info_for("bigserial", Dialect.POSTGRESQL)
    translated = catalog.translate(info, Dialect.POSTGRESQL, Dialect.MYSQL)

    assert info.is_serial
    assert translated.token == "BIGINT"
    assert translated.auto_increment is True
    assert translated.family == TypeFamily.INTEGER


@pytest.mark.parametrize(
    "target, expected",
    [
        (Dialect.SQLITE, "NVARCHAR(8)"),
        (Dialect.SQLSERVER, "NVARCHAR(8)"),
        (Dialect.POSTGRESQL, "CHARACTER VARYING(8)"),
        (Dialect.MARIADB, "ENUM('open','closed')"),
    ],
)
def test_enum_sizing(catalog: TypeCatalog, target: Dialect, expected: str) -> None:
    """Test enum literals become sized text outside MySQL."""
    assert convert(catalog, "ENUM('open','closed')", Dialect.MYSQL, target) == expected


@pytest.mark.parametrize(
    "token, source, target, expected",
    [
        ("timestamptz", Dialect.POSTGRESQL, Dialect.MYSQL, "TIMESTAMP"),
        ("timestamp", Dialect.POSTGRESQL, Dialect.MYSQL, "TIMESTAMP"),
        ("timestamp without time zone", Dialect.POSTGRESQL, Dialect.MYSQL, "DATETIME"),
        ("timestamp", Dialect.MYSQL, Dialect.POSTGRESQL, "TIMESTAMP WITH TIME ZONE"),
        ("datetime", Dialect.MYSQL, Dialect.POSTGRESQL, "TIMESTAMP WITHOUT TIME ZONE"),
        ("timestamp with time zone", Dialect.POSTGRESQL, Dialect.SQLSERVER, "DATETIMEOFFSET"),
        ("timestamp(6)", Dialect.MYSQL, Dialect.SQLITE, "TIMESTAMP"),
        ("jsonb", Dialect.POSTGRESQL, Dialect.MYSQL, "JSON"),
        ("json", Dialect.MYSQL, Dialect.POSTGRESQL, "JSONB"),
        ("json", Dialect.MYSQL, Dialect.SQLITE, "TEXT"),
        ("longtext", Dialect.MYSQL, Dialect.POSTGRESQL, "TEXT"),
        ("text", Dialect.POSTGRESQL, Dialect.MYSQL, "TEXT"),
        ("decimal(10,2)", Dialect.MYSQL, Dialect.SQLITE, "REAL"),
        ("numeric(12,4)", Dialect.POSTGRESQL, Dialect.SQLSERVER, "NUMERIC(12,4)"),
        ("money", Dialect.SQLSERVER, Dialect.MYSQL, "DECIMAL(19,4)"),
        ("int(11)", Dialect.MYSQL, Dialect.POSTGRESQL, "INTEGER"),
        ("mediumint", Dialect.MYSQL, Dialect.SQLSERVER, "INT"),
        ("int(10) unsigned", Dialect.MYSQL, Dialect.MARIADB, "INT UNSIGNED"),
        ("varchar", Dialect.POSTGRESQL, Dialect.MYSQL, "VARCHAR(255)"),
        ("character varying", Dialect.POSTGRESQL, Dialect.SQLSERVER, "NVARCHAR(255)"),
        ("varchar(40)", Dialect.MYSQL, Dialect.SQLITE, "NVARCHAR(40)"),
        ("char(2)", Dialect.MYSQL, Dialect.POSTGRESQL, "CHARACTER(2)"),
        ("nvarchar(max)", Dialect.SQLSERVER, Dialect.MYSQL, "TEXT"),
        ("uuid", Dialect.POSTGRESQL, Dialect.SQLSERVER, "UNIQUEIDENTIFIER"),
        ("bytea", Dialect.POSTGRESQL, Dialect.SQLSERVER, "VARBINARY(MAX)"),
        ("blob", Dialect.MYSQL, Dialect.POSTGRESQL, "BYTEA"),
        ("bit", Dialect.SQLSERVER, Dialect.POSTGRESQL, "BOOLEAN"),
        ("double precision", Dialect.POSTGRESQL, Dialect.MYSQL, "DOUBLE"),
    ],
)
def test_translate(
    catalog: TypeCatalog, token: str, source: Dialect, target: Dialect, expected: str
) -> None:
    """Test type translation between dialects."""
    assert convert(catalog, token, source, target) == expected


def test_varchar_default_length_is_configurable() -> None:
    """Test the configured length for unsized VARCHAR targets."""
    catalog = TypeCatalog(varchar_default_length=191)

    assert convert(catalog, "text", Dialect.SQLITE, Dialect.MYSQL) == "TEXT"
    assert convert(catalog, "varchar", Dialect.SQLITE, Dialect.MYSQL) == "VARCHAR(191)"


@pytest.mark.parametrize("target", list(Dialect))
def test_unknown_type_falls_back(
    catalog: TypeCatalog, target: Dialect, caplog: pytest.LogCaptureFixture
) -> None:
    """Test that unknown types pass through upper-cased with a warning."""
    info = catalog.type_info_for("geometry", Dialect.MYSQL)

    with caplog.at_level(logging.WARNING):
        translated = catalog.translate(info, Dialect.MYSQL, target)

    assert translated.token == "GEOMETRY"
    assert translated.known is False
    assert translated.family == TypeFamily.OTHER
    assert "geometry" in caplog.text


def test_unknown_type_warning_can_be_disabled(caplog: pytest.LogCaptureFixture) -> None:
    """Test that the unknown-type warning follows the setting."""
    catalog = TypeCatalog(warn_on_unknown_type=False)
    info = catalog.type_info_for("point", Dialect.MYSQL)

    with caplog.at_level(logging.WARNING):
        assert catalog.translate(info, Dialect.MYSQL, Dialect.SQLITE).token == "POINT"

    assert caplog.text == ""


@pytest.mark.parametrize(
    "canonical, family",
    [
        ("tinyint(1)", TypeFamily.BOOLEAN),
        ("bigint", TypeFamily.INTEGER),
        ("decimal", TypeFamily.FLOAT),
        ("enum", TypeFamily.TEXT),
        ("datetime", TypeFamily.TEMPORAL),
        ("jsonb", TypeFamily.JSON),
        ("blob", TypeFamily.BINARY),
        ("geometry", TypeFamily.OTHER),
    ],
)
def test_family_of(catalog: TypeCatalog, canonical: str, family: TypeFamily) -> None:
    """Test type family lookup."""
    assert catalog.family_of(canonical) == family


def test_module_level_functions() -> None:
    """Test the catalog functions exported from the package root."""
    from schemashift import canonical_type, translate_type, type_info_for

    info = type_info_for("bigserial", Dialect.POSTGRESQL)
    translated = translate_type(info, Dialect.POSTGRESQL, Dialect.SQLITE)

    assert canonical_type(info, Dialect.POSTGRESQL) == "bigserial"
    assert translated.token == "INTEGER"
    assert translated.auto_increment
