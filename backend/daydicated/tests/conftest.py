"""
Shared fixtures: an isolated in-memory database per test and an API client.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
import daydicated.models  # noqa: F401
from daydicated.db.base import Base
from daydicated.db.session import get_db
from daydicated.main import app
from daydicated.core.exceptions import FetchError, WriteError
from daydicated.services.auth_service import AuthSession, register_user
from daydicated.services.entry_store import EntryStore

PASSWORD = "testpassword123"


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def alice(db):
    return register_user(db, "alice", "alice@example.com", PASSWORD)


@pytest.fixture
def bob(db):
    return register_user(db, "bob", "bob@example.com", PASSWORD)


@pytest.fixture
def store(db):
    return EntryStore(db)


@pytest.fixture
def alice_session(db, alice):
    session = AuthSession(db)
    session.restore(alice)
    return session


@pytest.fixture
def login_headers(client):
    """Log in through the API and return bearer headers."""
    def _login(email, password=PASSWORD):
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['access_token']}"}
    return _login


class FailingStore(EntryStore):
    """Store whose backend is unreachable."""

    def query_entries(self, owner_id=None):
        raise FetchError("storage offline")

    def write_entry(self, key, entry):
        raise WriteError("storage offline")


@pytest.fixture
def failing_store(db):
    return FailingStore(db)


@pytest.fixture
def database_down():
    """Stand-in for a session method whose connection is gone."""
    def _raise(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("db down"))
    return _raise
