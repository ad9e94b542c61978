# src/lions_forum/scripts/init_db.py
"""Create the forum tables and the default categories without Alembic."""
from __future__ import annotations

import argparse
import logging

from lions_forum.core.settings import settings
from lions_forum.db.session import Database, seed_categories

logger = logging.getLogger(__name__)


def init_db(url: str | None = None, *, drop: bool = False) -> Database:
    """Create every table (optionally dropping them first) and seed categories."""
    database = Database(url or settings.effective_database_url, echo=settings.sql_debug)
    if drop:
        logger.warning("Dropping all tables on %s", database.engine.url)
        database.drop_tables()
    database.create_tables()
    seed_categories(database, settings.default_categories)
    return database


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--url", help="Database URL (defaults to DATABASE_URL)")
    parser.add_argument("--drop", action="store_true", help="Drop existing tables first")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level.upper())
    database = init_db(args.url, drop=args.drop)
    database.dispose()
    print("Database initialized.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
