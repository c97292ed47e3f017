"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    create_db_engine,
    build_session_factory,
    init_database,
    get_db_session,
)
from domain.models.meal import Meal

__all__ = [
    # Database
    "Base",
    "create_db_engine",
    "build_session_factory",
    "init_database",
    "get_db_session",
    # Meal models
    "Meal",
]
