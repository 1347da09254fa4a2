# tests/conftest.py

import logging
import os
import tempfile

import pytest

# Point the app at a throwaway SQLite file before laundry_service.db builds its engine
_TEST_DB_PATH = os.path.join(tempfile.mkdtemp(prefix="laundry-tests-"), "test.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_DB_PATH}"
os.environ.setdefault("SESSION_SECRET", "test-session-secret")

from fastapi.testclient import TestClient  # noqa: E402

from laundry_service.db import Base, SessionLocal, engine  # noqa: E402
from laundry_service.main import app  # noqa: E402

# Suppress noisy logs from SQLAlchemy/FastAPI during tests for cleaner output
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("fastapi").setLevel(logging.WARNING)
logging.getLogger("laundry_service").setLevel(logging.WARNING)


@pytest.fixture(scope="function", autouse=True)
def clean_database():
    """Give every test empty tables."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function")
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def other_client():
    """A second browser with its own cookie jar."""
    with TestClient(app) as test_client:
        yield test_client


def signup(client: TestClient, name="Asha", phone="+91 98765 43210", password="pass1"):
    return client.post(
        "/api/customer/signup",
        json={"name": name, "phone": phone, "password": password},
    )


VALID_BOOKING = {
    "bookingDate": "2024-05-01",
    "bookingTime": "10:00",
    "address": "12, MG Road",
    "city": "Pune",
}
