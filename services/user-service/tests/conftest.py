"""
Test configuration and fixtures
"""

import os
import sys
from pathlib import Path
from unittest.mock import patch

# Add parent directory (user-service) to sys.path so 'app' can be imported
service_dir = Path(__file__).parent.parent
sys.path.insert(0, str(service_dir))

# Set test environment variables BEFORE importing app modules
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["REPOSITORY_BACKEND"] = "database"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["JSON_LOGS"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from app.database import Base, engine, get_db  # noqa: E402
from app.domain.entities import User  # noqa: E402
from app.main import app  # noqa: E402
from app.repositories.memory_repository import InMemoryUserRepository  # noqa: E402

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def memory_repo():
    """Empty in-memory repository."""
    return InMemoryUserRepository()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database dependency override"""

    def override_get_db():
        yield db_session

    # Tables come from db_session; skip startup table creation
    with patch("app.main.init_db"):
        app.dependency_overrides[get_db] = override_get_db
        with TestClient(app) as test_client:
            yield test_client
        app.dependency_overrides.clear()


@pytest.fixture
def alice():
    return User(id=1, name="Alice", email="alice@example.com")


@pytest.fixture
def sample_users():
    """Three unsaved users."""
    return [
        User(name="Alice", email="alice@example.com"),
        User(name="Bob"),
        User(name="Carol", email="carol@example.com"),
    ]
