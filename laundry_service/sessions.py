# laundry_service/sessions.py

from typing import Any, MutableMapping, Optional

from fastapi import Request

from .schemas import CustomerIdentity

CUSTOMER_SESSION_KEY = "customer"
_IDENTITY_FIELDS = ("id", "name", "phone")


class SessionIdentityStore:
    """Reads and writes the logged-in customer in the request's session bag.

    Only the ``customer`` key is touched; anything else in the bag is left alone.
    """

    def __init__(self, session: MutableMapping[str, Any]):
        self._session = session

    def read_identity(self) -> Optional[CustomerIdentity]:
        value = self._session.get(CUSTOMER_SESSION_KEY)
        if not isinstance(value, dict):
            return None
        # a partially populated value counts as logged out
        if not all(value.get(field) for field in _IDENTITY_FIELDS):
            return None
        return CustomerIdentity(
            id=str(value["id"]), name=str(value["name"]), phone=str(value["phone"])
        )

    def write_identity(self, identity: Optional[CustomerIdentity]) -> None:
        if identity is None:
            self._session[CUSTOMER_SESSION_KEY] = None
            return
        self._session[CUSTOMER_SESSION_KEY] = {
            "id": identity.id,
            "name": identity.name,
            "phone": identity.phone,
        }


def get_identity_store(request: Request) -> SessionIdentityStore:
    return SessionIdentityStore(request.session)
