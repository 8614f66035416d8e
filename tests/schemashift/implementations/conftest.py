"""Shared fixtures for emitter tests."""

import pytest

from schemashift.config import Settings
from schemashift.schema import Column, IndexDefinition, Table, UniqueConstraint


@pytest.fixture
def emitter_settings() -> Settings:
    """Settings for emitter tests."""
    return Settings(mysql_engine="InnoDB", mysql_charset="utf8mb4")


@pytest.fixture
def translated_table() -> Table:
    """Table whose column types are already spelled for the target."""
    table = Table(name="accounts")
    table.add_column(Column(name="id", raw_type="INTEGER", is_auto_increment=True))
    table.add_column(
        Column(name="email", raw_type="TEXT", nullable=False, comment="login's email")
    )
    table.add_column(Column(name="score", raw_type="REAL", default_value="0"))
    table.add_primary_key("id")
    table.unique_constraints.append(UniqueConstraint(columns=["email"], name="uq_email"))
    table.indexes.append(IndexDefinition(columns=["score"]))
    return table


@pytest.fixture
def composite_table() -> Table:
    """Table with a two-column key and no auto-increment."""
    table = Table(name="memberships")
    table.add_column(Column(name="user_id", raw_type="INTEGER"))
    table.add_column(Column(name="group_id", raw_type="INTEGER"))
    table.add_primary_key("user_id")
    table.add_primary_key("group_id")
    table.unique_constraints.append(UniqueConstraint(columns=["group_id", "user_id"]))
    return table
