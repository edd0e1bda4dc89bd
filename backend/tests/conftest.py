"""
conftest.py
------------
Pytest fixtures for FastAPI + SQLAlchemy tests.

Goals:
- Provide a fast, isolated test database (SQLite) that does NOT touch a real Postgres.
- Override the app's `get_db` dependency so API tests use the test Session.
- Create tables once per test session, and clean rows between tests.

Why SQLite (file) and not in-memory?
- FastAPI's TestClient may run requests in different threads.
- SQLite in-memory DB is process-local *and* connection-local; different connections
  would see different (empty) DBs.
- A temporary **file-backed** SQLite database is visible to all connections in the
  test process and needs no external services.

The app reads its settings at import time, so `DATABASE_URL` and
`SEED_ON_STARTUP` are set *before* anything from `backend` is imported:
the startup hook then creates tables in the temp file and skips seeding.

Fixture scopes:
- `test_engine_dbfile`: session-scoped temp file path; removed at the end.
- `test_engine`: session-scoped SQLAlchemy Engine bound to that file; creates tables once.
- `db_session`: function-scoped Session; cleans all tables between tests.
- `uow`: function-scoped UnitOfWork around `db_session`, for service-level tests.
- `client`: function-scoped FastAPI TestClient with `get_db` dependency overridden to use `db_session`.
"""

import os
import sys
import tempfile

import pytest
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

# Ensure project root is on sys.path so `import backend.*` works from a plain checkout
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

_DB_FD, _DB_PATH = tempfile.mkstemp(suffix=".db")
os.close(_DB_FD)  # SQLAlchemy manages its own connections
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_PATH}"
os.environ["SEED_ON_STARTUP"] = "false"

# Import the app and ORM metadata so we can:
# - create tables on the test engine
# - override the app's DB dependency
from backend.main import app  # noqa: E402
from backend.db import Base, build_engine, get_db  # noqa: E402
from backend.repositories.unit_of_work import UnitOfWork  # noqa: E402


@pytest.fixture(scope="session")
def test_engine_dbfile():
    """
    Path of the temporary SQLite **file** the app was configured with.

    Yields:
        str: Absolute path to the temporary .db file.
    """
    yield _DB_PATH


@pytest.fixture(scope="session")
def test_engine(test_engine_dbfile):
    """
    Create a SQLAlchemy Engine bound to the temporary SQLite database file.

    `build_engine` is the same factory the app uses, so the test engine also
    runs with `check_same_thread=False` and `PRAGMA foreign_keys=ON`.

    Yields:
        sqlalchemy.engine.Engine: Engine connected to the test SQLite DB.
    """
    engine = build_engine(f"sqlite:///{test_engine_dbfile}")
    # Create all ORM tables once per session (fast and sufficient for tests)
    Base.metadata.create_all(bind=engine)
    yield engine

    # --- Teardown in correct order for Windows ---
    engine.dispose()  # release file handle
    try:
        os.remove(test_engine_dbfile)
    except FileNotFoundError:
        pass


@pytest.fixture(scope="function")
def db_session(test_engine):
    """
    Provide a fresh SQLAlchemy Session for each test function.

    After the test, closes the Session and deletes all rows from all tables
    in **reverse dependency order**, so child tables are cleared before parents.
    """
    TestingSessionLocal = sessionmaker(bind=test_engine, autocommit=False, autoflush=False)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Clean all tables between tests (keeps schema, wipes data)
        for tbl in reversed(Base.metadata.sorted_tables):
            session.execute(tbl.delete())
        session.commit()
        session.close()


@pytest.fixture(scope="function")
def uow(db_session):
    """Unit of work over the test session, for calling services directly."""
    return UnitOfWork(db_session)


@pytest.fixture(scope="function")
def client(db_session):
    """
    FastAPI TestClient that uses the test Session instead of the configured database.

    Usage in tests:
        def test_something(client, db_session):
            # Arrange: write directly with db_session or through the API
            # Act: call endpoints with client
            # Assert: verify responses and/or DB state
    """

    def override_get_db():
        try:
            yield db_session
        finally:
            # Nothing special to close here; db_session is closed in its fixture
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    # Ensure we leave the app in a clean state for subsequent tests
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Payload helpers shared by the API tests
# ---------------------------------------------------------------------------

@pytest.fixture
def john_payload():
    return {
        "firstName": "John",
        "lastName": "Doe",
        "email": "john.doe@email.com",
        "phone": "(555) 123-4567",
        "customerType": "Individual",
    }


@pytest.fixture
def home_address_payload():
    return {
        "addressType": "Home",
        "street": "123 Main St",
        "city": "Anytown",
        "state": "CA",
        "zipCode": "12345",
        "isPrimary": True,
    }
