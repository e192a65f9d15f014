# src/showcase/scripts/init_db.py
"""Create or reset the configured database schema without Alembic."""
from __future__ import annotations

import argparse
import logging

from showcase.core.settings import settings
from showcase.db.session import create_tables, drop_tables

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Create the Showcase tables")
    parser.add_argument(
        "--drop-tables",
        action="store_true",
        help="Drop every table before creating them again.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level.upper())
    if args.drop_tables:
        drop_tables()
        logger.info("Dropped all tables")
    create_tables()
    logger.info("Database initialized at %s", settings.effective_database_url)


if __name__ == "__main__":
    main()
