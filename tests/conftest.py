"""
Shared fixtures.

The settings object is built at import time, so the test environment is
set here before anything from ``teamdash`` is imported. Every test gets an
empty in-memory SQLite schema.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timedelta  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from teamdash.core import security  # noqa: E402
from teamdash.core.enums import Role  # noqa: E402
from teamdash.db.session import SessionLocal, drop_all_tables, init_db  # noqa: E402
from teamdash.db.store import Store  # noqa: E402
from teamdash.main import app  # noqa: E402

PASSWORD = "secret123"


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start=datetime(2024, 3, 1, 9, 0, 0)):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture(autouse=True)
def fresh_schema():
    drop_all_tables()
    init_db()
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db):
    return Store(db)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user():
    """Create a committed user in its own session and return the record."""
    counter = {"n": 0}

    def _make_user(name=None, role=Role.EMPLOYEE, email=None):
        counter["n"] += 1
        name = name or f"User {counter['n']}"
        email = email or f"user{counter['n']}@acme.io"
        session = SessionLocal()
        try:
            user_store = Store(session)
            with user_store.atomic():
                user = user_store.add_user(
                    name=name, email=email,
                    hashed_password=security.get_password_hash(PASSWORD), role=role.value,
                )
        finally:
            session.close()
        return user

    return _make_user


@pytest.fixture
def manager(make_user):
    return make_user(name="Maya Manager", role=Role.MANAGER, email="maya@acme.io")


@pytest.fixture
def employee(make_user):
    return make_user(name="Eli Employee", email="eli@acme.io")


@pytest.fixture
def other_employee(make_user):
    return make_user(name="Noor Employee", email="noor@acme.io")


def auth_headers(user):
    token = security.create_access_token(data={"sub": user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    return auth_headers


@pytest.fixture
def password():
    return PASSWORD
