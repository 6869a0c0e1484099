"""
Tests for token issuing and verification.
"""

import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode

import pytest

from auth.jwt import InvalidToken, create_token, verify_token
from config.settings import config

THIRTY_DAYS = 30 * 86400


def _decode_claims(token: str) -> dict:
    encoded = token.split(".")[0]
    return json.loads(urlsafe_b64decode(encoded + "=" * (-len(encoded) % 4)))


class TestCreateToken:
    def test_roundtrip_resolves_same_identity(self):
        token = create_token("a@x.com", "uid-a")
        claims = verify_token(token)
        assert claims.email == "a@x.com"
        assert claims.user_id == "uid-a"

    def test_distinct_identities_do_not_cross(self):
        a = verify_token(create_token("a@x.com", "uid-a"))
        b = verify_token(create_token("b@x.com", "uid-b"))
        assert a.email != b.email

    def test_expiry_is_thirty_days(self):
        assert config.jwt_expiry_seconds == THIRTY_DAYS
        claims = _decode_claims(create_token("a@x.com", "uid-a", issued_at=1_000))
        assert claims["iat"] == 1_000
        assert claims["exp"] == 1_000 + THIRTY_DAYS


class TestVerifyToken:
    def test_expired_token_rejected_despite_valid_signature(self):
        issued = int(time.time()) - THIRTY_DAYS - 5
        token = create_token("a@x.com", "uid-a", issued_at=issued)
        with pytest.raises(InvalidToken) as exc:
            verify_token(token)
        assert exc.value.reason == "expired"

    def test_valid_just_before_expiry(self):
        token = create_token("a@x.com", "uid-a", issued_at=0)
        assert verify_token(token, now=THIRTY_DAYS - 1).email == "a@x.com"
        with pytest.raises(InvalidToken):
            verify_token(token, now=THIRTY_DAYS)

    def test_tampered_payload_rejected(self):
        token = create_token("a@x.com", "uid-a")
        claims = _decode_claims(token)
        claims["sub"] = "b@x.com"
        forged = urlsafe_b64encode(json.dumps(claims).encode()).decode().rstrip("=")
        with pytest.raises(InvalidToken) as exc:
            verify_token(forged + "." + token.split(".")[1])
        assert exc.value.reason == "bad_signature"

    def test_foreign_secret_rejected(self):
        token = create_token("a@x.com", "uid-a", secret="some-other-secret")
        with pytest.raises(InvalidToken) as exc:
            verify_token(token)
        assert exc.value.reason == "bad_signature"

    @pytest.mark.parametrize(
        "token",
        ["", "abc", "a.b.c", ".sig", "payload.", "!!!.deadbeef", "é.ü"],
    )
    def test_malformed_tokens_rejected(self, token):
        with pytest.raises(InvalidToken):
            verify_token(token)

    def test_signed_payload_missing_claims_is_malformed(self):
        raw = b'{"sub": "a@x.com"}'
        sig = hmac.new(config.jwt_secret.encode(), raw, hashlib.sha256).hexdigest()
        encoded = urlsafe_b64encode(raw).decode().rstrip("=")
        with pytest.raises(InvalidToken) as exc:
            verify_token(encoded + "." + sig)
        assert exc.value.reason == "malformed"
