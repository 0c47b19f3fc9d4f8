"""
Database Package

Database models, connection management, and data persistence layer.
"""
from src.studenthousing.db.base import Base
from src.studenthousing.db.session import (
    engine,
    SessionLocal,
    get_db_session,
    health_check,
    close_connections,
    create_all_tables,
    drop_all_tables,
)
from src.studenthousing.db.models import Lister, Listing
from src.studenthousing.db.repository import (
    BaseRepository,
    ListerRepository,
    DuplicateUsernameError,
)

__all__ = [
    # Base
    "Base",
    # Session management
    "engine",
    "SessionLocal",
    "get_db_session",
    "health_check",
    "close_connections",
    "create_all_tables",
    "drop_all_tables",
    # Models
    "Lister",
    "Listing",
    # Repositories
    "BaseRepository",
    "ListerRepository",
    "DuplicateUsernameError",
]
