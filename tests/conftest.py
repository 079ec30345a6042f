"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports and binds the
application to an in-memory MongoDB (mongomock) for every test.
"""

import sys
from pathlib import Path

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import mongomock
import pytest
from fastapi.testclient import TestClient

from adapters import mongo_adapter
from main import create_app
from test_fixtures import TEST_SETTINGS, signup_user

# Build the app once; its lifespan (real MongoDB connection) is never entered
# because the TestClient is not used as a context manager.
test_app = create_app(TEST_SETTINGS)


@pytest.fixture
def mongo_db():
    """Fresh in-memory database with the application's indexes."""
    db = mongomock.MongoClient()[TEST_SETTINGS.mongo_db_name]
    mongo_adapter.use_database(db)
    yield db
    mongo_adapter.close()


@pytest.fixture
def app(mongo_db):
    return test_app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth_headers(client):
    headers, _ = signup_user(client)
    return headers


@pytest.fixture
def other_auth_headers(client):
    """A second, unrelated account for ownership checks."""
    headers, _ = signup_user(client, name="Michael Chen")
    return headers
