"""
Shared fixtures.

The application reads its settings at import time, so the temporary
database and image directory are exported before ``main`` is imported.
"""

import os
import tempfile
from datetime import date, timedelta
from pathlib import Path

_TMP_DIR = Path(tempfile.mkdtemp(prefix="vacations-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR / 'test.db'}"
os.environ["IMAGE_DIR"] = str(_TMP_DIR / "images")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from database import Base, SessionLocal, engine  # noqa: E402
from main import app  # noqa: E402
from core.media import image_store  # noqa: E402


@pytest.fixture(autouse=True)
def tables():
    """Fresh tables for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store():
    return image_store


# ---------- TEST DATA HELPERS ----------


def future(days: int) -> str:
    return (date.today() + timedelta(days=days)).isoformat()


def past(days: int) -> str:
    return (date.today() - timedelta(days=days)).isoformat()


def vacation_form(**overrides) -> dict:
    form = {
        "destination": "Lisbon",
        "description": "A week by the Tagus",
        "start_date": future(10),
        "end_date": future(17),
        "price": "1200",
    }
    form.update(overrides)
    return form


def image_file(name: str = "beach.jpg", content: bytes = b"\xff\xd8\xff fake jpeg") -> dict:
    return {"image": (name, content, "image/jpeg")}


def user_dict(**overrides) -> dict:
    user = {
        "firstName": "Alice",
        "lastName": "Smith",
        "email": "alice@vacations.io",
        "password": "secret123",
        "role": "user",
    }
    user.update(overrides)
    return user


@pytest.fixture
def create_vacation(client):
    """POST a valid vacation and return its JSON row."""

    def _create(**overrides):
        r = client.post("/vacations", data=vacation_form(**overrides), files=image_file())
        assert r.status_code == 200, r.text
        return r.json()["vacation"]

    return _create
