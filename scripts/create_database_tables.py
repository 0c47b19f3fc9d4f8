"""
Create Database Tables Using SQLAlchemy

Creates all tables directly with SQLAlchemy's create_all(), bypassing Alembic.
Useful for local development against SQLite or a fresh PostgreSQL database.
"""
import argparse
import sys
from pathlib import Path

# Add parent directory to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import settings
from src.studenthousing.db.session import create_all_tables, drop_all_tables
from src.studenthousing.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def main():
    """Create all database tables."""
    parser = argparse.ArgumentParser(description="Create database tables")
    parser.add_argument("--drop", action="store_true", help="Drop existing tables first")
    args = parser.parse_args()

    setup_logging()
    logger.info("creating_tables", database_url=settings.database_url.split("@")[-1])

    if args.drop:
        drop_all_tables()

    create_all_tables()
    logger.info("tables_ready")


if __name__ == "__main__":
    main()
