import os
import sys
import tempfile
from pathlib import Path

# Add backend directory to Python path FIRST
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Settings are read at import time, so they must be in place before any app import
os.environ["HELP_REQUESTS_DATABASE_URL"] = "sqlite:///:memory:"
os.environ["HELP_REQUESTS_LOG_DIR"] = tempfile.mkdtemp(prefix="help_requests_logs_")
os.environ["HELP_REQUESTS_JWT_SECRET"] = "test-secret"

# Now import after path is set
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from constants import AvailableLanguages
from database import Base, get_db, set_sqlite_pragma
from main import app
from models import Article, User
from security import create_access_token

# All sessions share one in-memory database through a single connection
test_engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
event.listen(test_engine, "connect", set_sqlite_pragma)
TestingSessionLocal = sessionmaker(bind=test_engine)


def override_get_db():
    """Override session to use test engine"""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def db_session():
    """Fresh schema per test"""
    Base.metadata.create_all(test_engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(test_engine)


@pytest.fixture
def client(db_session):
    """Test client bound to the test database"""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def users(db_session):
    """Two registered users in different zip codes"""
    alice = User(first_name="Alice", last_name="Adams", email="alice@example.org", zip_code="10115")
    bob = User(first_name="Bob", last_name="Becker", email="bob@example.org", zip_code="80331")
    db_session.add_all([alice, bob])
    db_session.commit()
    return [alice, bob]


@pytest.fixture
def articles(db_session):
    """Small catalog; ids are fixed so tests can use them in paths"""
    catalog = [
        Article(id=1, name="Brot (500 g)", language=AvailableLanguages.DE),
        Article(id=7, name="Milch (1 l)", language=AvailableLanguages.DE),
        Article(id=9, name="Toilet paper (8 rolls)", language=AvailableLanguages.EN),
    ]
    db_session.add_all(catalog)
    db_session.commit()
    return catalog


@pytest.fixture
def auth_headers_for():
    """Build bearer headers for an arbitrary user id"""
    def _headers(user_id):
        return {"Authorization": f"Bearer {create_access_token({'userId': user_id})}"}
    return _headers


@pytest.fixture
def auth_headers(users, auth_headers_for):
    """Bearer headers for the first seeded user"""
    return auth_headers_for(users[0].id)


@pytest.fixture
def second_session(db_session):
    """Independent session on the test database, for concurrent writers"""
    session = TestingSessionLocal()
    yield session
    session.close()
