import os

# Settings are read at import time, so the test environment goes in first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENVIRONMENT"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from workout_api.domain.models.user import User
from workout_api.infrastructure.database import init_db
from workout_api.main import create_app

PASSWORD = "correct horse battery"


@pytest.fixture
def engine():
    """Provide an isolated in-memory database for each test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    with TestClient(create_app(session_factory)) as client:
        yield client


@pytest.fixture
def make_user(session_factory):
    def _make_user(username: str, password: str = PASSWORD) -> User:
        session = session_factory()
        try:
            user = User(username=username, email=f"{username}@example.com", bio="")
            user.set_password(password)
            session.add(user)
            session.commit()
            session.refresh(user)
            session.expunge(user)
            return user
        finally:
            session.close()

    return _make_user


@pytest.fixture
def login(client):
    def _login(username: str, password: str = PASSWORD) -> dict:
        resp = client.post(
            "/tokens/authentication",
            json={"username": username, "password": password},
        )
        assert resp.status_code == 201, resp.text
        return {"Authorization": f"Bearer {resp.json()['auth_token']}"}

    return _login
