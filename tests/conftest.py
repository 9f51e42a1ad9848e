import os

# Settings are read once and cached, so the test environment has to be in
# place before anything from the inventory package is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["JWT_SECRET"] = "test-secret-key-for-testing-only"
os.environ["SEED_DEMO_DATA"] = "false"

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from inventory.main import app
from inventory.database import Base, get_db
from inventory.schemas.auth import AuthPrincipal
from inventory.services.auth_service import ADMIN_EMAIL, ADMIN_PASSWORD, AuthService

# Create test database (SQLite in-memory for testing)
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    """Override database dependency for testing."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


# Override the dependency
app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(scope="function")
def client():
    """Create test client with fresh database for each test."""
    # Create tables
    Base.metadata.create_all(bind=engine)

    with TestClient(app) as test_client:
        yield test_client

    # Drop tables after test
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create database session for direct database access in tests."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def token_factory():
    """
    Factory creating tokens signed with the test secret.

    Args:
        email: Email claim
        role: Role claim
        expired: If True, the token expired an hour ago
    """
    def create_token(email: str = ADMIN_EMAIL, role: str = "admin", expired: bool = False) -> str:
        issued_at = datetime.now(timezone.utc)
        if expired:
            issued_at -= timedelta(hours=2)
        principal = AuthPrincipal(email=email, role=role)
        return AuthService().create_access_token(principal, issued_at=issued_at)

    return create_token


@pytest.fixture
def auth_token(token_factory) -> str:
    """A valid token for the admin user."""
    return token_factory()


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def admin_credentials() -> dict[str, str]:
    return {"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}


@pytest.fixture
def product_payload() -> dict:
    return {
        "name": "Test Product",
        "description": "A product used in tests",
        "price": 99.99,
        "category": "Testing",
        "stock": 10,
        "active": True,
    }


@pytest.fixture
def jwt_secret() -> str:
    return os.environ["JWT_SECRET"]
