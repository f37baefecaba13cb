"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ourportfolio.config import get_settings
from ourportfolio.database import Base, enable_sqlite_foreign_keys, get_db
from ourportfolio.models import Portfolio, Project, ProjectImage, RefreshToken, User  # noqa: F401
from ourportfolio.services.account import AccountService

TEST_EMAIL = "test@example.com"
TEST_PASSWORD = "password123"
TEST_NICKNAME = "tester"


@pytest.fixture(name="db_session")
def db_session_fixture():
    """Create an in-memory SQLite database for tests."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    testing_session_local = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(name="upload_dir", autouse=True)
def upload_dir_fixture(tmp_path, monkeypatch):
    """Point image storage at a per-test temporary directory."""
    upload_dir = tmp_path / "uploads"
    monkeypatch.setattr(get_settings(), "UPLOAD_DIR", str(upload_dir))
    return upload_dir


@pytest.fixture(name="client")
def client_fixture(db_session: Session):
    """Create a test client with overridden DB dependency and disabled rate limiting."""
    from main import app
    from ourportfolio.rate_limit import limiter

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    limiter.enabled = False
    with TestClient(app) as c:
        yield c
    limiter.enabled = True
    app.dependency_overrides.clear()


@pytest.fixture(name="account_service")
def account_service_fixture() -> AccountService:
    return AccountService()


@pytest.fixture(name="test_user")
def test_user_fixture(db_session: Session, account_service: AccountService):
    """Create and log in a test user. Returns ids and both tokens."""
    user = account_service.signup(db_session, TEST_EMAIL, TEST_PASSWORD, TEST_NICKNAME)
    pair = account_service.login(db_session, TEST_EMAIL, TEST_PASSWORD)

    return {
        "user_id": user.id,
        "email": user.email,
        "nickname": user.nickname,
        "access_token": pair.access_token,
        "refresh_token": pair.refresh_token,
        "headers": {"ACCESSTOKEN": pair.access_token},
    }


@pytest.fixture(name="other_user")
def other_user_fixture(db_session: Session, account_service: AccountService):
    """A second, independent account."""
    user = account_service.signup(db_session, "other@example.com", "other12345", "other")
    pair = account_service.login(db_session, "other@example.com", "other12345")
    return {
        "user_id": user.id,
        "access_token": pair.access_token,
        "headers": {"ACCESSTOKEN": pair.access_token},
    }
