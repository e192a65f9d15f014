# src/showcase/scripts/migrate.py
"""Apply Alembic migrations to the configured database."""
from __future__ import annotations

import argparse
import logging
import os

from alembic import command
from alembic.config import Config

from showcase.core.settings import settings

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = os.path.abspath(
    os.path.join(os.path.dirname(__file__), "..", "..", "..", "migrations")
)


def alembic_config() -> Config:
    cfg = Config(os.path.join(MIGRATIONS_DIR, "alembic.ini"))
    cfg.set_main_option("sqlalchemy.url", settings.effective_database_url)
    cfg.set_main_option("script_location", MIGRATIONS_DIR)
    return cfg


def run_upgrade_head(revision: str = "head") -> None:
    logger.info("Upgrading %s to %s", settings.effective_database_url, revision)
    command.upgrade(alembic_config(), revision)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Upgrade the Showcase schema")
    parser.add_argument("revision", nargs="?", default="head", help="Target revision (default: head)")
    args = parser.parse_args(argv)
    logging.basicConfig(level=settings.log_level.upper())
    run_upgrade_head(args.revision)


if __name__ == "__main__":
    main()
