# laundry_service/security.py

"""Password records and phone normalization.

Stored passwords use the layout ``pbkdf2_sha256$<salt hex>$<derived hex>``.
"""

import hashlib
import hmac
import re
import secrets

ALGORITHM_TAG = "pbkdf2_sha256"
ITERATIONS = 210_000
DERIVED_KEY_LENGTH = 32
SALT_BYTES = 16

_PHONE_NOISE = re.compile(r"[\s-]+")


def normalize_phone(phone: str) -> str:
    """Strip whitespace and hyphens so differently formatted numbers compare equal."""
    return _PHONE_NOISE.sub("", phone)


def hash_password(password: str, salt: str) -> str:
    derived = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        ITERATIONS,
        dklen=DERIVED_KEY_LENGTH,
    )
    return derived.hex()


def make_password_hash(password: str) -> str:
    salt = secrets.token_hex(SALT_BYTES)
    return f"{ALGORITHM_TAG}${salt}${hash_password(password, salt)}"


def verify_password(password: str, stored: str) -> bool:
    """Check ``password`` against a stored record.

    Malformed or tampered records simply fail verification.
    """
    parts = stored.split("$")
    if len(parts) != 3:
        return False
    _, salt, expected = parts
    derived = hash_password(password, salt)
    # compare_digest rejects non-ASCII str, so compare bytes
    return hmac.compare_digest(expected.encode("utf-8"), derived.encode("utf-8"))
