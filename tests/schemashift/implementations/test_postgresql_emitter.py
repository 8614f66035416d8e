"""Tests for the PostgreSQL emitter."""

import pytest

from schemashift.config import Settings
from schemashift.implementations.postgresql import PostgreSQLEmitter
from schemashift.schema import Column, Table


@pytest.fixture
def emitter(emitter_settings: Settings) -> PostgreSQLEmitter:
    """Create PostgreSQL emitter instance."""
    return PostgreSQLEmitter(emitter_settings)


def test_emit_table(emitter: PostgreSQLEmitter, translated_table: Table) -> None:
    """Test the full PostgreSQL rendering."""
    sql = emitter.emit(translated_table)

    assert sql == (
        'CREATE TABLE "accounts" (\r\n'
        '\t"id" SERIAL PRIMARY KEY NOT NULL,\r\n'
        '\t"email" TEXT NOT NULL,\r\n'
        '\t"score" REAL NULL DEFAULT 0,\r\n'
        '\tCONSTRAINT "uq_email" UNIQUE ("email")\r\n'
        ");\r\n"
        'CREATE INDEX "idx_accounts_score" ON "accounts" ("score");'
    )


def test_bigint_becomes_bigserial(emitter: PostgreSQLEmitter) -> None:
    """Test BIGSERIAL for 64-bit auto-increment columns."""
    table = Table(name="t")
    table.add_column(Column(name="id", raw_type="BIGINT", is_auto_increment=True))
    table.add_primary_key("id")

    assert '"id" BIGSERIAL PRIMARY KEY NOT NULL' in emitter.emit(table)


def test_emit_composite_key(emitter: PostgreSQLEmitter, composite_table: Table) -> None:
    """Test trailing key and unnamed unique constraint."""
    sql = emitter.emit(composite_table)

    assert 'PRIMARY KEY ("user_id", "group_id")' in sql
    assert 'UNIQUE ("group_id", "user_id")' in sql
    assert sql.endswith(");")


def test_empty_table(emitter: PostgreSQLEmitter) -> None:
    """Test that a table without columns still renders."""
    assert emitter.emit(Table(name="empty")) == 'CREATE TABLE "empty" (\r\n\r\n);'
