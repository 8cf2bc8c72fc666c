"""
Pytest configuration and shared fixtures.

Points the application at an in-memory SQLite database before any project
module is imported, and makes the project root importable.
"""

import os
import sys
from pathlib import Path

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "testing"
os.environ["JWT_SECRET"] = "canteen-test-secret-with-32-plus-bytes"

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from domain.enums import UserRole  # noqa: E402
from domain.models import SessionLocal, drop_database, init_database  # noqa: E402
from main import app  # noqa: E402
from test_fixtures import make_user  # noqa: E402


@pytest.fixture(scope="function")
def db_session():
    """
    Session on a freshly created schema.

    The in-memory database is shared with the app (single StaticPool
    connection), so rows created here are visible to requests made through
    the ``client`` fixture and vice versa.
    """
    init_database()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        drop_database()


@pytest.fixture(scope="function")
def client(db_session):
    """TestClient bound to the same schema as ``db_session``"""
    return TestClient(app)


@pytest.fixture
def admin_user(db_session):
    return make_user(db_session, name="Canteen Admin", role=UserRole.ADMIN)


@pytest.fixture
def student(db_session):
    return make_user(db_session, name="Nimal Perera", index_no="IT21004512")


@pytest.fixture
def other_student(db_session):
    return make_user(db_session, name="Kavindi Silva", index_no="IT21007788")
