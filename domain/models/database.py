"""
Database configuration and session management.

The engine and session factory are built explicitly and attached to the
FastAPI application; request handlers receive a session through
``get_db_session`` instead of reaching for a module-level global.
"""

import logging
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger("dailydiet.database")

# Create SQLAlchemy Base
Base = declarative_base()


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine for ``database_url``.

    SQLite connections are shared across the request threadpool, and an
    in-memory SQLite database is pinned to a single connection so every
    session sees the same data.
    """
    kwargs = {"echo": echo, "future": True}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker:
    """Create the session factory bound to ``engine``"""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)


def init_database(engine: Engine) -> None:
    """Initialize database schema"""
    with engine.begin() as conn:
        Base.metadata.create_all(bind=conn)
    logger.info("Database tables created successfully")


def get_db_session(request: Request) -> Generator[Session, None, None]:
    """Get database session (for FastAPI dependency injection)"""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
