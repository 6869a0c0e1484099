"""
JWT-style token creation and verification.

Tokens are base64url-encoded JSON claims signed with HMAC-SHA256.
Secret key is loaded from ``config.jwt_secret`` (env var: ``JWT_SECRET``).
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from dataclasses import dataclass

from config.settings import config


class InvalidToken(Exception):
    """Token failed verification; ``reason`` is for server logs only."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


@dataclass(frozen=True)
class TokenClaims:
    email: str
    user_id: str
    issued_at: int
    expires_at: int


def _sign(raw: bytes, secret: str) -> str:
    return hmac.new(secret.encode(), raw, hashlib.sha256).hexdigest()


def create_token(
    email: str,
    user_id: str,
    *,
    issued_at: int | None = None,
    secret: str | None = None,
) -> str:
    """Create a signed token for ``email`` valid for ``jwt_expiry_seconds``."""
    iat = int(time.time()) if issued_at is None else int(issued_at)
    payload = {
        "sub": email,
        "uid": user_id,
        "iat": iat,
        "exp": iat + config.jwt_expiry_seconds,
    }
    raw = json.dumps(payload, separators=(",", ":")).encode()
    sig = _sign(raw, secret or config.jwt_secret)
    return urlsafe_b64encode(raw).decode().rstrip("=") + "." + sig


def verify_token(
    token: str,
    *,
    now: float | None = None,
    secret: str | None = None,
) -> TokenClaims:
    """
    Verify token and return its claims.

    Raises ``InvalidToken`` with reason ``malformed``, ``bad_signature``
    or ``expired``.
    """
    parts = token.split(".")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise InvalidToken("malformed")

    encoded, sig = parts
    try:
        raw = urlsafe_b64decode(encoded + "=" * (-len(encoded) % 4))
    except (binascii.Error, ValueError):
        raise InvalidToken("malformed")

    expected_sig = _sign(raw, secret or config.jwt_secret)
    if not hmac.compare_digest(sig.encode(), expected_sig.encode()):
        raise InvalidToken("bad_signature")

    try:
        payload = json.loads(raw)
        claims = TokenClaims(
            email=str(payload["sub"]),
            user_id=str(payload["uid"]),
            issued_at=int(payload["iat"]),
            expires_at=int(payload["exp"]),
        )
    except (ValueError, KeyError, TypeError):
        raise InvalidToken("malformed")

    current = time.time() if now is None else now
    if current >= claims.expires_at:
        raise InvalidToken("expired")
    return claims
