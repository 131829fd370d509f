"""
Test configuration and fixtures for the FastAPI link shortener.
This centralizes all test setup, making individual tests clean.
"""

import os

# Must be set before the app (and its settings) are imported
TEST_DATABASE_URL = "sqlite:///./test.db"
os.environ["DATABASE_URL"] = TEST_DATABASE_URL

import pytest
from fastapi.testclient import TestClient

from main import app
from shortlink_app.database.connection import Database, get_db
from shortlink_app.storage import LinkStore
from shortlink_app.services.link_service import LinkService


@pytest.fixture(scope="function")
def database():
    """
    Connected test database, wiped after each test.
    This ensures tests are isolated and don't affect each other.
    """
    database = Database(TEST_DATABASE_URL)
    database.connect()
    try:
        yield database
    finally:
        database.drop_all()
        database.dispose()


@pytest.fixture(scope="function")
def db_session(database):
    """Fresh database session for each test"""
    with database.session() as db:
        yield db


@pytest.fixture(scope="function")
def store(db_session):
    return LinkStore(db_session)


@pytest.fixture(scope="function")
def service(store):
    return LinkService(store=store)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database dependency overridden.
    This is the main fixture that tests will use.
    """
    def override_get_db():
        yield db_session

    # Override the database dependency
    app.dependency_overrides[get_db] = override_get_db

    # Create test client (runs the lifespan: connect/dispose)
    with TestClient(app) as test_client:
        yield test_client

    # Clean up overrides
    app.dependency_overrides.clear()
