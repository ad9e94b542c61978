# src/lions_forum/scripts/migrate.py
"""Apply Alembic migrations up to the latest revision."""
from __future__ import annotations

from pathlib import Path

from alembic import command
from alembic.config import Config

from lions_forum.core.settings import settings

MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"


def run_upgrade_head(url: str | None = None) -> None:
    cfg = Config(str(MIGRATIONS_DIR / "alembic.ini"))
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.set_main_option("sqlalchemy.url", url or settings.database_url_sync)
    command.upgrade(cfg, "head")


if __name__ == "__main__":
    run_upgrade_head()
