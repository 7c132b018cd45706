"""
Pytest configuration and shared fixtures for the Loops tests.
"""
import os
import random
import sys
from pathlib import Path

import pytest

# Keep the app away from the real database file
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from loops import models  # noqa: F401  (registers the tables)
from loops.core.database import Base, get_db
from loops.services import GameServices, LevelServices


@pytest.fixture
def rng():
    """Deterministic random source for the generator."""
    return random.Random(1234)


@pytest.fixture
def db_session():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def game_services(db_session, rng):
    return GameServices(db_session, LevelServices(rng=rng))


@pytest.fixture
def client(db_session):
    """FastAPI TestClient bound to the in-memory database."""
    from fastapi.testclient import TestClient
    from loops.main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
