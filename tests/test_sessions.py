"""Tests for the session identity accessor, using a plain dict as the session bag."""

import pytest

from laundry_service.schemas import CustomerIdentity
from laundry_service.sessions import CUSTOMER_SESSION_KEY, SessionIdentityStore

ASHA = CustomerIdentity(id="c-1", name="Asha", phone="+919876543210")


def test_read_identity_empty_session() -> None:
    assert SessionIdentityStore({}).read_identity() is None


def test_write_then_read_identity() -> None:
    session = {}
    store = SessionIdentityStore(session)

    store.write_identity(ASHA)

    assert session[CUSTOMER_SESSION_KEY] == {
        "id": "c-1",
        "name": "Asha",
        "phone": "+919876543210",
    }
    assert store.read_identity() == ASHA


@pytest.mark.parametrize(
    "value",
    [
        None,
        "c-1",
        {"id": "c-1", "name": "Asha"},
        {"id": "c-1", "phone": "+919876543210"},
        {"id": "", "name": "Asha", "phone": "+919876543210"},
        {"id": "c-1", "name": None, "phone": "+919876543210"},
    ],
)
def test_partial_identity_counts_as_logged_out(value) -> None:
    store = SessionIdentityStore({CUSTOMER_SESSION_KEY: value})
    assert store.read_identity() is None


def test_logout_keeps_other_session_data() -> None:
    session = {"cart": ["wash-and-fold"]}
    store = SessionIdentityStore(session)
    store.write_identity(ASHA)

    store.write_identity(None)

    assert store.read_identity() is None
    assert session == {CUSTOMER_SESSION_KEY: None, "cart": ["wash-and-fold"]}
