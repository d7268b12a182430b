"""End-to-end tests for the Alembic migration scripts.

Tests verify that the migrations:
1. Create every table the ORM maps, with every mapped column
2. Leave a database that the repositories can write to
3. Can be downgraded and upgraded again
"""

from pathlib import Path

import pytest
import sqlalchemy as sa
from alembic import command
from alembic.script import ScriptDirectory
from sqlmodel import SQLModel

import fleetdesk.core.database.entities  # noqa: F401

APPLICATION_TABLES = set(SQLModel.metadata.tables)


def sync_engine(database_file: Path) -> sa.Engine:
    return sa.create_engine(f"sqlite:///{database_file}")


def table_names(database_file: Path) -> set:
    engine = sync_engine(database_file)
    try:
        return set(sa.inspect(engine).get_table_names()) - {"alembic_version"}
    finally:
        engine.dispose()


class TestMigrationScripts:
    def test_single_head(self, alembic_config):
        assert len(ScriptDirectory.from_config(alembic_config).get_heads()) == 1


class TestMigrationUpgrade:
    def test_creates_every_mapped_table(self, alembic_config, database_file):
        command.upgrade(alembic_config, "head")

        assert table_names(database_file) == APPLICATION_TABLES

    @pytest.mark.parametrize("table", sorted(APPLICATION_TABLES))
    def test_mapped_columns_exist(self, alembic_config, database_file, table):
        command.upgrade(alembic_config, "head")

        engine = sync_engine(database_file)
        try:
            migrated = {column["name"] for column in sa.inspect(engine).get_columns(table)}
        finally:
            engine.dispose()
        assert set(SQLModel.metadata.tables[table].columns.keys()) <= migrated

    def test_migrated_schema_accepts_rows(self, alembic_config, database_file):
        command.upgrade(alembic_config, "head")

        engine = sync_engine(database_file)
        try:
            with engine.begin() as conn:
                conn.execute(
                    sa.text(
                        "INSERT INTO vehicles (id, make, model, registration, type, status, fuel_type, "
                        "created_at, updated_at) VALUES ('v1', 'Toyota', 'Hilux', 'SO-1', 'soft_skin', "
                        "'active', 'diesel', '2025-01-01 00:00:00', '2025-01-01 00:00:00')"
                    )
                )
                count = conn.execute(sa.text("SELECT COUNT(*) FROM vehicles")).scalar_one()
        finally:
            engine.dispose()
        assert count == 1


class TestMigrationDowngrade:
    def test_downgrade_drops_everything(self, alembic_config, database_file):
        command.upgrade(alembic_config, "head")

        command.downgrade(alembic_config, "base")

        assert table_names(database_file) == set()

    def test_upgrade_after_downgrade(self, alembic_config, database_file):
        command.upgrade(alembic_config, "head")
        command.downgrade(alembic_config, "base")

        command.upgrade(alembic_config, "head")

        assert table_names(database_file) == APPLICATION_TABLES
