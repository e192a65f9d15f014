# tests/test_scripts.py
"""Tests for the schema management scripts."""

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from showcase.scripts import init_db
from showcase.scripts.migrate import MIGRATIONS_DIR


def test_migrations_build_schema(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    cfg = Config()
    cfg.set_main_option("script_location", MIGRATIONS_DIR)
    cfg.set_main_option("sqlalchemy.url", url)

    command.upgrade(cfg, "head")

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        assert {"projects", "reviews"} <= set(inspector.get_table_names())
        review_columns = {column["name"] for column in inspector.get_columns("reviews")}
        assert {"rating", "helpful_count", "fingerprint_hash", "created_at"} <= review_columns
    finally:
        engine.dispose()

    command.downgrade(cfg, "base")
    engine = create_engine(url)
    try:
        assert "projects" not in inspect(engine).get_table_names()
    finally:
        engine.dispose()


def test_init_db_creates_tables(mocker) -> None:
    create = mocker.patch.object(init_db, "create_tables")
    drop = mocker.patch.object(init_db, "drop_tables")

    init_db.main([])
    create.assert_called_once_with()
    drop.assert_not_called()

    init_db.main(["--drop-tables"])
    drop.assert_called_once_with()
    assert create.call_count == 2
