# File: chariot/db/init_db.py
"""
Database initialization script for Chariot.

Creates the spells and monsters tables. Run with `--reset` to drop and
recreate them.
"""

import argparse
import logging
import os
from pathlib import Path

from chariot.core.config import settings
from chariot.db.session import init_db

logger = logging.getLogger(__name__)


def create_database_directory():
    """Create the SQLite database directory if it doesn't exist."""
    if not settings.DATABASE_URL.startswith("sqlite:///"):
        return
    db_path = settings.DATABASE_URL[len("sqlite:///"):]
    if not db_path or db_path == ":memory:":
        return
    try:
        db_dir = Path(db_path).parent
        if not db_dir.exists():
            logger.info(f"Creating database directory: {db_dir}")
            os.makedirs(db_dir, exist_ok=True)
    except Exception as e:
        logger.error(f"Error creating database directory: {str(e)}")
        raise


def main(reset: bool = False) -> bool:
    """
    Initialize the database.

    Args:
        reset: Whether to reset the database by dropping all tables first
    """
    create_database_directory()

    if not init_db(reset=reset):
        logger.error("Database initialization failed")
        return False
    logger.info("Database initialized successfully")
    return True


if __name__ == "__main__":
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Initialize the Chariot database")
    parser.add_argument("--reset", action="store_true", help="Drop all tables before creating them")
    args = parser.parse_args()

    raise SystemExit(0 if main(reset=args.reset) else 1)
