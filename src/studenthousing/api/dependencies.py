"""
FastAPI Dependencies

Provides dependency injection for database sessions and settings.
"""
from typing import Generator
from sqlalchemy.orm import Session

from config.settings import settings
from src.studenthousing.db.session import SessionLocal


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields:
        SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_settings():
    """
    Settings dependency.

    Returns:
        Application settings
    """
    return settings
