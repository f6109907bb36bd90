# tests/conftest.py
import itertools
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from ticketdesk.category.models import Category
from ticketdesk.core.database import Base, SessionLocal, engine
from ticketdesk.core.security import create_access_token, hash_password
from ticketdesk.main import app
from ticketdesk.user.models import User

PASSWORD = "secret123"
PASSWORD_HASH = hash_password(PASSWORD)


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_user(db):
    counter = itertools.count(1)

    def _make(role="user", name=None, department="TI"):
        n = next(counter)
        user = User(
            name=name or f"{role.title()} {n}",
            email=f"{role}{n}@company.com",
            password_hash=PASSWORD_HASH,
            role=role,
            department=department,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_category(db):
    def _make(name="Rede", priority="alta", sla_time=8, is_active=True):
        category = Category(name=name, priority=priority, sla_time=sla_time, is_active=is_active)
        db.add(category)
        db.commit()
        db.refresh(category)
        return category

    return _make


@pytest.fixture
def auth():
    def _headers(user) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _headers


@pytest.fixture
def users(make_user):
    """One of each role plus a second plain user."""
    return {
        "requester": make_user("user"),
        "other": make_user("user"),
        "support": make_user("support"),
        "admin": make_user("admin"),
    }
