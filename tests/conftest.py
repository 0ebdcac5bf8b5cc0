"""
Pytest configuration for the task API tests.

DATABASE_URL and API_KEY must be set before any task_api imports because
task_api/config.py caches settings and task_api/database.py builds its
engine at module level.
"""

import os
import sys
from pathlib import Path
from unittest.mock import MagicMock

# --- Environment setup (before ANY task_api imports) ---
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["API_KEY"] = "test-api-key"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"

# Add project root so `from task_api.xxx import ...` works
sys.path.insert(0, str(Path(__file__).parent.parent))
# Add tests dir so `from factories import ...` works
sys.path.insert(0, str(Path(__file__).parent))

import pytest

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from task_api import models  # noqa: F401
from task_api.crud import TaskRepository
from task_api.database import Base, get_db
from task_api.main import app
from task_api.routes import get_task_repository


# ---------------------------------------------------------------------------
# Test engine: SQLite in-memory with StaticPool so all threads/connections
# share the same database (required for TestClient which runs in a thread).
# ---------------------------------------------------------------------------
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=engine
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a fresh SQLAlchemy session for repository tests."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def repository(db_session):
    return TaskRepository(db_session)


@pytest.fixture
def client():
    """TestClient backed by the SQLite test database."""
    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def mock_repository():
    """Repository double; lets tests assert storage was never reached."""
    return MagicMock(spec=TaskRepository)


@pytest.fixture
def mock_client(mock_repository):
    """TestClient whose task routes talk to ``mock_repository``."""
    app.dependency_overrides[get_task_repository] = lambda: mock_repository
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
