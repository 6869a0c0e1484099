"""
End-to-end tests for /api/auth and the bearer-token dependency.
"""

import time

import pytest
from sqlalchemy import select

from auth.jwt import create_token
from conftest import bearer, register
from database.models import User


class TestRegister:
    @pytest.mark.asyncio
    async def test_register_returns_token_and_default_name(self, client):
        resp = await client.post(
            "/api/auth/register",
            json={"email": "a@x.com", "password": "secret1"},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["token"]
        assert body["user"] == {"email": "a@x.com", "name": "a"}

    @pytest.mark.asyncio
    async def test_register_keeps_explicit_name(self, client):
        resp = await client.post(
            "/api/auth/register",
            json={"email": "a@x.com", "password": "secret1", "name": "Anna"},
        )
        assert resp.json()["user"]["name"] == "Anna"

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, client, database):
        await register(client, "a@x.com")
        resp = await client.post(
            "/api/auth/register",
            json={"email": "a@x.com", "password": "another1"},
        )
        assert resp.status_code == 400
        assert resp.json()["error"] == "User already exists"

        async with database.session_factory() as s:
            users = (await s.execute(select(User))).scalars().all()
        assert len(users) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload, message",
        [
            ({"email": "a@x.com"}, "Email and password are required"),
            ({"password": "secret1"}, "Email and password are required"),
            ({"email": "a@x.com", "password": "12345"}, "Password must be at least 6 characters"),
            ({"email": "a@x.com", "password": "p" * 80}, "Password cannot be longer than 72 bytes"),
            ({"email": "a@x.com", "password": "\u00e9" * 40}, "Password cannot be longer than 72 bytes"),
        ],
    )
    async def test_invalid_payload_is_400(self, client, payload, message):
        resp = await client.post("/api/auth/register", json=payload)
        assert resp.status_code == 400
        assert resp.json()["error"] == message


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_success(self, client):
        await register(client, "a@x.com")
        resp = await client.post(
            "/api/auth/login",
            json={"email": "a@x.com", "password": "secret1"},
        )
        assert resp.status_code == 200
        assert resp.json()["user"]["email"] == "a@x.com"

    @pytest.mark.asyncio
    async def test_wrong_password_is_401_and_keeps_last_login(self, client, database):
        await register(client, "a@x.com")
        async with database.session_factory() as s:
            before = await s.scalar(select(User.last_login).where(User.email == "a@x.com"))

        resp = await client.post(
            "/api/auth/login",
            json={"email": "a@x.com", "password": "wrong-pass"},
        )
        assert resp.status_code == 401

        async with database.session_factory() as s:
            after = await s.scalar(select(User.last_login).where(User.email == "a@x.com"))
        assert after == before

    @pytest.mark.asyncio
    async def test_unknown_email_same_message_as_wrong_password(self, client):
        await register(client, "a@x.com")
        unknown = await client.post(
            "/api/auth/login",
            json={"email": "nobody@x.com", "password": "secret1"},
        )
        wrong = await client.post(
            "/api/auth/login",
            json={"email": "a@x.com", "password": "nope-nope"},
        )
        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json() == wrong.json()

    @pytest.mark.asyncio
    async def test_overlong_password_is_401_for_known_and_unknown_email(self, client):
        await register(client, "a@x.com")
        known = await client.post(
            "/api/auth/login",
            json={"email": "a@x.com", "password": "p" * 80},
        )
        unknown = await client.post(
            "/api/auth/login",
            json={"email": "nobody@x.com", "password": "p" * 80},
        )
        assert known.status_code == unknown.status_code == 401
        assert known.json() == unknown.json() == {"error": "Invalid email or password"}

    @pytest.mark.asyncio
    async def test_successful_login_updates_last_login(self, client, database):
        await register(client, "a@x.com")
        async with database.session_factory() as s:
            before = await s.scalar(select(User.last_login).where(User.email == "a@x.com"))

        time.sleep(0.01)
        await client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret1"})

        async with database.session_factory() as s:
            after = await s.scalar(select(User.last_login).where(User.email == "a@x.com"))
        assert after > before


class TestMe:
    @pytest.mark.asyncio
    async def test_me_returns_profile_without_hash(self, client):
        token = await register(client, "a@x.com", name="Anna")
        resp = await client.get("/api/auth/me", headers=bearer(token))
        assert resp.status_code == 200
        body = resp.json()
        assert body["email"] == "a@x.com"
        assert body["name"] == "Anna"
        assert body["createdAt"]
        assert "password" not in str(body).lower()

    @pytest.mark.asyncio
    async def test_missing_token_is_401(self, client):
        resp = await client.get("/api/auth/me")
        assert resp.status_code == 401
        assert resp.json()["error"] == "Access token required"

    @pytest.mark.asyncio
    async def test_non_bearer_scheme_is_401(self, client):
        resp = await client.get("/api/auth/me", headers={"Authorization": "Basic abc"})
        assert resp.status_code == 401

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "token",
        [
            "garbage",
            create_token("a@x.com", "uid", secret="not-the-server-secret"),
            create_token("a@x.com", "uid", issued_at=int(time.time()) - 31 * 86400),
        ],
    )
    async def test_bad_token_is_403_with_generic_message(self, client, token):
        await register(client, "a@x.com")
        resp = await client.get("/api/auth/me", headers=bearer(token))
        assert resp.status_code == 403
        assert resp.json()["error"] == "Invalid or expired token"

    @pytest.mark.asyncio
    async def test_valid_token_for_missing_user_is_404(self, client):
        token = create_token("ghost@x.com", "uid-ghost")
        resp = await client.get("/api/auth/me", headers=bearer(token))
        assert resp.status_code == 404
