"""
Shared fixtures: a throwaway SQLite database per test and an ASGI client
wired to it, with the upstream translation API replaced by a mock transport.
"""

import os

# Cheap bcrypt for the test run; must be set before config is imported.
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import httpx
import pytest
import pytest_asyncio

from database.session import Database
from utils.llm_providers import AnthropicProvider


UPSTREAM_REPLY = {
    "id": "msg_test",
    "type": "message",
    "role": "assistant",
    "content": [{"type": "text", "text": "hello"}],
}


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest_asyncio.fixture
async def database(database_url):
    db = Database(database_url)
    await db.connect()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def session(database):
    async with database.session_factory() as s:
        yield s
        await s.commit()


@pytest.fixture
def upstream_requests():
    return []


@pytest.fixture
def translator(upstream_requests):
    def handler(request: httpx.Request) -> httpx.Response:
        upstream_requests.append(request)
        return httpx.Response(200, json=UPSTREAM_REPLY)

    return AnthropicProvider(api_key="test-key", transport=httpx.MockTransport(handler))


@pytest_asyncio.fixture
async def client(database, translator):
    from main import create_app

    app = create_app(database=database, translator=translator)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c


async def register(client, email: str, password: str = "secret1", **extra) -> str:
    """Register ``email`` and return its bearer token."""
    resp = await client.post(
        "/api/auth/register",
        json={"email": email, "password": password, **extra},
    )
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
