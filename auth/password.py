"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.
"""

from __future__ import annotations

from functools import lru_cache

import bcrypt

from config.settings import config

# bcrypt only reads this many bytes of input; longer passwords are rejected.
MAX_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    return len(password.encode()) > MAX_PASSWORD_BYTES


def hash_password(password: str) -> str:
    """Hash a password with bcrypt (auto-salted, work factor ``bcrypt_rounds``)."""
    if password_too_long(password):
        raise ValueError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(
        password.encode(), bcrypt.gensalt(rounds=config.bcrypt_rounds)
    ).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """
    Constant-time comparison against a bcrypt hash.

    Returns False on mismatch, and for passwords over ``MAX_PASSWORD_BYTES``
    (which can never have been stored). Raises ``ValueError`` if
    ``password_hash`` is not a bcrypt digest.
    """
    raw = password.encode()
    if len(raw) > MAX_PASSWORD_BYTES:
        # Still pay for one comparison so the response time stays the same.
        bcrypt.checkpw(raw[:MAX_PASSWORD_BYTES], password_hash.encode())
        return False
    return bcrypt.checkpw(raw, password_hash.encode())


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password("traduciamo-dummy-password")


def dummy_verify(password: str) -> bool:
    """Spend one bcrypt comparison so unknown emails cost as much as bad passwords."""
    verify_password(password, _dummy_hash())
    return False
