from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from streaming_platform.main import create_app
from streaming_platform.platform.db.init_db import create_all
from streaming_platform.platform.db.session import get_session

DEPLOYER = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
WALLET_1 = "ST1SJ3DTE5DN7X54YDH5D64R3BCB6A2AG2ZQ8YPD5"
WALLET_2 = "ST2CY5V39NHDPWSXMW9QDT3HC3GD6Q6XX4CFRK9AG"
WALLET_3 = "ST2JHG361ZXG51QTKY2NQCVBPPRRE2KZB1HR05NNC"


@pytest_asyncio.fixture
async def engine(tmp_path) -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}")
    await create_all(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    maker = async_sessionmaker(engine, expire_on_commit=False)
    async with maker() as session:
        yield session


@pytest_asyncio.fixture
async def client(engine: AsyncEngine, monkeypatch: pytest.MonkeyPatch) -> AsyncIterator[AsyncClient]:
    from streaming_platform.platform.config import settings

    monkeypatch.setattr(settings, "platform_owner", None)
    monkeypatch.setattr(settings, "default_platform_fee", 5)

    app = create_app()
    maker = async_sessionmaker(engine, expire_on_commit=False)

    async def _override_session() -> AsyncIterator[AsyncSession]:
        async with maker() as session:
            yield session

    app.dependency_overrides[get_session] = _override_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def register(client: AsyncClient):
    async def _register(name: str, address: str | None = None) -> dict:
        body = {"email": f"{name}@example.com", "password": "pass1234"}
        if address is not None:
            body["address"] = address
        response = await client.post("/api/v1/auth/register", json=body)
        assert response.status_code == 200, response.text
        payload = response.json()
        return {
            "address": payload["address"],
            "headers": {"Authorization": f"Bearer {payload['access_token']}"},
        }

    return _register


@pytest_asyncio.fixture
async def accounts(register) -> dict[str, dict]:
    # registration order matters: the first account becomes the platform owner
    return {
        "deployer": await register("deployer", DEPLOYER),
        "wallet_1": await register("wallet1", WALLET_1),
        "wallet_2": await register("wallet2", WALLET_2),
        "wallet_3": await register("wallet3", WALLET_3),
    }


@pytest.fixture
def mine_block(client: AsyncClient):
    async def _mine(account: dict, *calls: tuple) -> dict:
        response = await client.post(
            "/api/v1/blocks",
            headers=account["headers"],
            json={"calls": [{"function": fn, "args": list(args)} for fn, *args in calls]},
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _mine


@pytest.fixture
def read_only(client: AsyncClient):
    async def _read(function: str, *args: str, sender: str | None = None) -> str:
        body = {"function": function, "args": list(args)}
        if sender is not None:
            body["sender"] = sender
        response = await client.post("/api/v1/blocks/read-only", json=body)
        assert response.status_code == 200, response.text
        return response.json()["result"]

    return _read
