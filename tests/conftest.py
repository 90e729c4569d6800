import os

# Settings are read once at import time; point them at test values first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENVIRONMENT"] = "test"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["API_PREFIX"] = ""

from collections import namedtuple

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from teamtasker.infrastructure.database import Base, get_db
from teamtasker.main import app

PASSWORD = "secret123"

LoggedIn = namedtuple("LoggedIn", ["client", "user"])


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client_factory(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    clients = []

    def make(**kwargs):
        client = TestClient(app, **kwargs)
        clients.append(client)
        return client

    yield make

    for client in clients:
        client.close()
    app.dependency_overrides.clear()


@pytest.fixture
def client(client_factory):
    return client_factory()


@pytest.fixture
def login_as(client_factory):
    """Register a user on a fresh client, log in and return (client, user)."""
    def _login(name, email, password=PASSWORD):
        c = client_factory()
        resp = c.post("/auth/register", json={"name": name, "email": email, "password": password})
        assert resp.status_code == 201, resp.text
        resp = c.post("/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return LoggedIn(c, resp.json()["user"])

    return _login


@pytest.fixture
def alice(login_as):
    return login_as("Alice", "alice@example.com")


@pytest.fixture
def bob(login_as):
    return login_as("Bob", "bob@example.com")


@pytest.fixture
def carol(login_as):
    return login_as("Carol", "carol@example.com")


@pytest.fixture
def eng_team(alice):
    resp = alice.client.post("/teams", json={"name": "Eng"})
    assert resp.status_code == 201, resp.text
    return resp.json()["team"]
