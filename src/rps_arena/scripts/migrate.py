# src/rps_arena/scripts/migrate.py
from __future__ import annotations

from pathlib import Path

from alembic import command
from alembic.config import Config

from rps_arena.core.settings import settings

PROJECT_ROOT = Path(__file__).resolve().parents[3]


def run_upgrade_head() -> None:
    """Apply every pending Alembic revision to the configured database."""
    cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("sqlalchemy.url", settings.database_url_sync)
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    command.upgrade(cfg, "head")


if __name__ == "__main__":
    run_upgrade_head()
