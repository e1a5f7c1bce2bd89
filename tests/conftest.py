"""Pytest configuration and fixtures."""

import os

# Point the application at the test database before it is imported.
# Running in Docker - use a PostgreSQL test database; locally - use SQLite.
if os.getenv("DATABASE_URL"):
    os.environ["DATABASE_URL"] = os.environ["DATABASE_URL"].replace("/cookbook", "/cookbook_test")
else:
    os.environ["DATABASE_URL"] = "sqlite:///./test.db"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from cookbook.database import Base, SessionLocal, engine, get_db  # noqa: E402
from cookbook.main import app  # noqa: E402
from cookbook.models.cookbook import Cookbook  # noqa: E402

SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"]


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    from cookbook import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = SessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def cookbook(db):
    """Create an empty cookbook."""
    book = Cookbook(name="Weeknight Dinners")
    db.add(book)
    db.commit()
    return book


@pytest.fixture
def create_recipe(client, cookbook):
    """Return a helper that creates a recipe through the API and returns its id."""

    def _create(title: str = "Toast", **fields):
        payload = {"cookbook_id": fields.pop("cookbook_id", cookbook.id), "title": title}
        payload.update(fields)
        response = client.post("/api/v1/recipes", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["id"]

    return _create


@pytest.fixture
def recipe(db, cookbook):
    """Create a bare recipe directly in the database."""
    from cookbook.models.recipe import Recipe

    row = Recipe(cookbook_id=cookbook.id, title="Plain Rice")
    db.add(row)
    db.commit()
    return row
