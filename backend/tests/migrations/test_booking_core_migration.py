# backend/tests/migrations/test_booking_core_migration.py
"""
The hand-written migration must build the same tables and columns as the
ORM metadata, and drop them again on downgrade.
"""

import importlib.util
from pathlib import Path

from alembic.migration import MigrationContext
from alembic.operations import Operations
import pytest
from sqlalchemy import create_engine, inspect

from careersync.database import Base
import careersync.models  # noqa: F401

MIGRATION = (
    Path(__file__).resolve().parents[2] / "alembic" / "versions" / "001_booking_core.py"
)


@pytest.fixture
def migration():
    spec = importlib.util.spec_from_file_location("booking_core_migration", MIGRATION)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'migration.db'}")
    yield engine
    engine.dispose()


def _run(engine, step):
    with engine.begin() as conn:
        ctx = MigrationContext.configure(conn)
        with Operations.context(ctx):
            step()


def test_upgrade_matches_models(engine, migration):
    _run(engine, migration.upgrade)

    inspector = inspect(engine)
    assert set(inspector.get_table_names()) == set(Base.metadata.tables)
    for name, table in Base.metadata.tables.items():
        migrated = {column["name"] for column in inspector.get_columns(name)}
        assert migrated == set(table.columns.keys()), name


def test_booking_timeslot_reference_is_unique_without_foreign_key(engine, migration):
    _run(engine, migration.upgrade)

    inspector = inspect(engine)
    referenced = {fk["referred_table"] for fk in inspector.get_foreign_keys("bookings")}
    assert "schedule_timeslots" not in referenced
    unique_columns = [u["column_names"] for u in inspector.get_unique_constraints("bookings")]
    unique_columns += [
        i["column_names"] for i in inspector.get_indexes("bookings") if i.get("unique")
    ]
    assert ["schedule_timeslot_id"] in unique_columns


def test_downgrade_drops_everything(engine, migration):
    _run(engine, migration.upgrade)
    _run(engine, migration.downgrade)

    assert inspect(engine).get_table_names() == []
