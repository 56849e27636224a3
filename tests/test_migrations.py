"""Alembic migrations produce the same schema the models declare."""
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from core.config import get_settings


ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def migrated_url(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    get_settings.cache_clear()

    config = Config()
    config.set_main_option("script_location", str(ROOT / "db" / "migrations"))
    command.upgrade(config, "head")

    yield url
    get_settings.cache_clear()


@pytest.mark.integration
def test_upgrade_creates_all_tables(migrated_url):
    engine = create_engine(migrated_url)
    inspector = inspect(engine)

    assert {"restaurants", "tables", "reservations", "reservation_tables"} <= set(inspector.get_table_names())

    unique_columns = [c["column_names"] for c in inspector.get_unique_constraints("reservation_tables")]
    assert ["reservation_id", "table_id"] in unique_columns
    engine.dispose()
