"""
Shared test fixtures and utilities for the Daily Diet test suite.

This module contains the application/database fixtures, payload builders and
client helpers reused across the test files. Every test gets its own
in-memory SQLite database, so tests never share state.
"""

import uuid
from datetime import datetime, timezone
from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.config import Settings, Environment
from domain.models import create_db_engine, build_session_factory, init_database
from main import create_app


# Realistic default meals
REALISTIC_MEALS = {
    "lunch": {
        "name": "Lunch",
        "description": "chicken+rice",
        "date": "2024-01-01T12:00:00Z",
        "is_diet": True,
    },
    "breakfast": {
        "name": "Breakfast",
        "description": "oatmeal with berries",
        "date": "2024-01-01T08:00:00-03:00",
        "is_diet": True,
    },
    "dinner": {
        "name": "Pizza night",
        "description": "two slices of pepperoni",
        "date": "2024-01-01T20:30:00+01:00",
        "is_diet": False,
    },
}


def make_meal_payload(meal_type: str = "lunch", **overrides) -> dict:
    """
    Build a valid meal creation payload.

    Args:
        meal_type: One of REALISTIC_MEALS keys (lunch, breakfast, dinner).
        **overrides: Field values replacing the defaults.

    Returns:
        dict: JSON body accepted by POST /

    Example:
        >>> make_meal_payload(is_diet=False)["is_diet"]
        False
    """
    payload = dict(REALISTIC_MEALS.get(meal_type, REALISTIC_MEALS["lunch"]))
    payload.update(overrides)
    return payload


def make_settings(**overrides) -> Settings:
    """Settings for an isolated in-memory database"""
    values = {
        "environment": Environment.TESTING,
        "database_url": "sqlite://",
        "db_init_attempts": 1,
        "db_init_delay_sec": 0,
    }
    values.update(overrides)
    return Settings(**values)


def build_test_app(**overrides) -> FastAPI:
    """Create an app with its own in-memory database and schema in place"""
    application = create_app(make_settings(**overrides))
    init_database(application.state.engine)
    return application


def new_client(application: FastAPI) -> TestClient:
    """A client with an empty cookie jar, i.e. a new anonymous visitor"""
    return TestClient(application)


def start_session(client: TestClient, meal_type: str = "lunch", **overrides) -> str:
    """Create a meal without a cookie and return the minted session token"""
    r = client.post("/", json=make_meal_payload(meal_type, **overrides))
    assert r.status_code == 201
    token = r.cookies.get("session_id")
    assert token
    return token


def only_meal_id(client: TestClient) -> str:
    """Id of the single meal visible to the client's session"""
    meals = client.get("/").json()["meals"]
    assert len(meals) == 1
    return meals[0]["id"]


def utc(year, month, day, hour=0, minute=0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def new_session_id() -> str:
    return str(uuid.uuid4())


# =============================================================================
# APPLICATION AND DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def app() -> Generator[FastAPI, None, None]:
    """Application bound to a fresh in-memory database"""
    application = build_test_app()
    try:
        yield application
    finally:
        application.state.engine.dispose()


@pytest.fixture(scope="function")
def client(app: FastAPI) -> TestClient:
    """Test client for an anonymous visitor (no session cookie yet)"""
    return new_client(app)


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """
    Create a database session for repository and service tests.

    Each test gets a brand new in-memory database, so nothing needs to be
    rolled back between tests.

    Yields:
        Session: SQLAlchemy database session
    """
    engine = create_db_engine("sqlite://")
    init_database(engine)
    SessionLocal = build_session_factory(engine)

    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()
        engine.dispose()
