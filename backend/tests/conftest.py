"""
Pytest configuration and fixtures for linkshelf tests.
"""

import os

# Settings are read at import time, so the environment is prepared before
# anything from linkshelf is imported.
os.environ.setdefault("SECRET_KEY", "test_secret_key_for_testing_only")
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DEBUG", "true")

import pytest
from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from linkshelf.core.database import Base, get_db
from linkshelf.core.auth import create_access_token, hash_password
from linkshelf.main import create_app
from linkshelf.models.link import Link
from linkshelf.models.tag import Tag
from linkshelf.models.user import User


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_engine():
    """Create a test database engine."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """Create a test database session."""
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=db_engine
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def test_app(db_session):
    """Create the application without lifespan events, bound to the test session."""
    test_app = create_app(use_lifespan=False)

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    test_app.dependency_overrides[get_db] = override_get_db

    return test_app


@pytest.fixture(scope="function")
def client(test_app) -> TestClient:
    """Create a test client without entering context manager."""
    return TestClient(test_app, raise_server_exceptions=False)


def make_user(db_session, email: str, password: str = "password123", name=None) -> User:
    user = User(email=email, password_hash=hash_password(password), name=name)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture(scope="function")
def test_user(db_session) -> User:
    """Create a test user with password ``password123``."""
    return make_user(db_session, "test@example.com", name="Test User")


@pytest.fixture(scope="function")
def other_user(db_session) -> User:
    """A second user who owns nothing the first user can touch."""
    return make_user(db_session, "other@example.com")


@pytest.fixture(scope="function")
def auth_headers(test_user) -> dict:
    """Create authentication headers for test requests."""
    return {"Authorization": f"Bearer {create_access_token(test_user.id)}"}


@pytest.fixture(scope="function")
def other_auth_headers(other_user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(other_user.id)}"}


@pytest.fixture(scope="function")
def test_tag(db_session, test_user) -> Tag:
    """Create a test tag."""
    tag = Tag(user_id=test_user.id, name="Technology")
    db_session.add(tag)
    db_session.commit()
    db_session.refresh(tag)
    return tag


@pytest.fixture(scope="function")
def other_tag(db_session, other_user) -> Tag:
    tag = Tag(user_id=other_user.id, name="Private")
    db_session.add(tag)
    db_session.commit()
    db_session.refresh(tag)
    return tag


@pytest.fixture(scope="function")
def test_link(db_session, test_user, test_tag) -> Link:
    """Create a test link tagged with ``test_tag``."""
    link = Link(
        user_id=test_user.id,
        url="https://reactjs.org",
        title="React Documentation",
        description="Official documentation for React",
        tags=[test_tag],
    )
    db_session.add(link)
    db_session.commit()
    db_session.refresh(link)
    return link


@pytest.fixture(scope="function")
def other_link(db_session, other_user) -> Link:
    link = Link(
        user_id=other_user.id,
        url="https://example.com/private",
        title="Someone else's link",
    )
    db_session.add(link)
    db_session.commit()
    db_session.refresh(link)
    return link
