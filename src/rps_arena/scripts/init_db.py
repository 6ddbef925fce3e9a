"""Create (or recreate) the tables for the configured database."""
from __future__ import annotations

import argparse
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from rps_arena.core.logging_config import configure_logging
from rps_arena.core.settings import settings
from rps_arena.db.session import create_tables, drop_tables

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create the RPS Arena tables")
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop every table before creating them again (destroys all data).",
    )
    args = parser.parse_args(argv)

    configure_logging(settings.log_level)
    try:
        if args.drop:
            drop_tables()
            logger.info("Dropped all tables")
        create_tables()
    except SQLAlchemyError as exc:
        logger.error("Database initialisation failed: %s", exc)
        return 1
    logger.info("Tables ready")
    return 0


if __name__ == "__main__":
    sys.exit(main())
