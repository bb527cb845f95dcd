import pytest

from conftest import DEPLOYER, WALLET_1


@pytest.mark.asyncio
async def test_block_receipts_are_independent(client, accounts, mine_block) -> None:
    block = await mine_block(
        accounts["wallet_1"],
        ("set-platform-fee", "u10"),
        ("create-playlist", "u1", '"Road trip"', "true"),
        ("create-playlist", "u1", '"Road trip"', "true"),
    )
    assert block["height"] == 1
    assert block["sender"] == WALLET_1
    assert [r["tx_index"] for r in block["receipts"]] == [0, 1, 2]
    assert [r["ok"] for r in block["receipts"]] == [False, True, False]
    assert [r["result"] for r in block["receipts"]] == ["(err u100)", "(ok true)", "(err u111)"]

    stored = await client.get("/api/v1/blocks/1")
    assert stored.status_code == 200
    payload = stored.json()
    assert payload["sender"] == WALLET_1
    assert payload["receipts"][1]["function"] == "create-playlist"
    assert payload["receipts"][1]["args"] == ["u1", '"Road trip"', "true"]

    tip = await client.get("/api/v1/blocks/tip")
    assert tip.json() == {"height": 1}

    missing = await client.get("/api/v1/blocks/2")
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_heights_increase_across_rest_and_block_calls(client, accounts, mine_block) -> None:
    first = await mine_block(accounts["deployer"], ("set-platform-fee", "u1"))

    created = await client.post(
        "/api/v1/playlists",
        headers=accounts["deployer"]["headers"],
        json={"playlist_id": 1, "name": "A"},
    )
    assert created.status_code == 200

    second = await mine_block(accounts["deployer"], ("set-platform-fee", "u2"))
    assert second["height"] == first["height"] + 2


@pytest.mark.asyncio
async def test_malformed_calls_are_rejected_before_mining(client, accounts) -> None:
    headers = accounts["deployer"]["headers"]

    for calls in (
        [{"function": "no-such-function", "args": []}],
        [{"function": "set-platform-fee", "args": ["10"]}],
        [{"function": "set-platform-fee", "args": []}],
        [{"function": "set-platform-fee", "args": ["u10"]}, {"function": "rate-content", "args": ["u1", "five"]}],
        [{"function": "get-platform-fee", "args": []}],
    ):
        response = await client.post("/api/v1/blocks", headers=headers, json={"calls": calls})
        assert response.status_code == 422, calls

    empty = await client.post("/api/v1/blocks", headers=headers, json={"calls": []})
    assert empty.status_code == 422

    tip = await client.get("/api/v1/blocks/tip")
    assert tip.json() == {"height": 0}


@pytest.mark.asyncio
async def test_mining_requires_authentication(client) -> None:
    response = await client.post("/api/v1/blocks", json={"calls": [{"function": "set-platform-fee", "args": ["u1"]}]})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_read_only_calls(client, accounts) -> None:
    fee = await client.post("/api/v1/blocks/read-only", json={"function": "get-platform-fee", "args": []})
    assert fee.status_code == 200
    assert fee.json() == {"height": 0, "result": "(ok u5)", "ok": True}

    owner = await client.post("/api/v1/blocks/read-only", json={"function": "get-platform-owner"})
    assert owner.json()["result"] == f"(ok '{DEPLOYER})"

    public = await client.post(
        "/api/v1/blocks/read-only",
        json={"function": "set-platform-fee", "args": ["u1"]},
    )
    assert public.status_code == 422


@pytest.mark.asyncio
async def test_idempotency_falls_back_when_redis_is_unavailable(client, accounts, monkeypatch) -> None:
    from streaming_platform.features.blocks import routes as blocks_routes

    def _broken_redis():
        raise ConnectionError("redis down")

    monkeypatch.setattr(blocks_routes, "get_redis", _broken_redis)

    response = await client.post(
        "/api/v1/blocks",
        headers={**accounts["deployer"]["headers"], "Idempotency-Key": "abc"},
        json={"calls": [{"function": "set-platform-fee", "args": ["u1"]}]},
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_duplicate_idempotency_key_is_rejected(client, accounts, monkeypatch) -> None:
    from streaming_platform.features.blocks import routes as blocks_routes

    class _FakeRedis:
        def __init__(self) -> None:
            self.keys: set[str] = set()

        async def set(self, key: str, value: str, ex: int, nx: bool) -> bool | None:
            if nx and key in self.keys:
                return None
            self.keys.add(key)
            return True

    fake = _FakeRedis()
    monkeypatch.setattr(blocks_routes, "get_redis", lambda: fake)

    headers = {**accounts["deployer"]["headers"], "Idempotency-Key": "block-1"}
    body = {"calls": [{"function": "set-platform-fee", "args": ["u1"]}]}

    first = await client.post("/api/v1/blocks", headers=headers, json=body)
    assert first.status_code == 200

    replay = await client.post("/api/v1/blocks", headers=headers, json=body)
    assert replay.status_code == 409

    tip = await client.get("/api/v1/blocks/tip")
    assert tip.json() == {"height": 1}


@pytest.mark.asyncio
async def test_out_of_range_arguments_are_request_errors(client, accounts, read_only) -> None:
    headers = accounts["wallet_1"]["headers"]
    too_big = "u18446744073709551616"

    for calls in (
        [{"function": "publish-content", "args": [too_big, '"T"', '"D"', "u1", "false", '"music"', "false"]}],
        [{"function": "publish-content", "args": ["u1", '"T"', '"D"', too_big, "false", '"music"', "false"]}],
        [{"function": "publish-content", "args": ["u1", f'"{"t" * 257}"', '"D"', "u1", "false", '"music"', "false"]}],
        [{"function": "create-playlist", "args": ["u1", '"Fine"', "true"]}, {"function": "add-to-playlist", "args": [too_big, "u1"]}],
    ):
        response = await client.post("/api/v1/blocks", headers=headers, json={"calls": calls})
        assert response.status_code == 422, calls

    lookup = await client.post("/api/v1/blocks/read-only", json={"function": "get-content", "args": [too_big]})
    assert lookup.status_code == 422

    assert await read_only("get-content", "u9223372036854775807") == "(err u102)"

    tip = await client.get("/api/v1/blocks/tip")
    assert tip.json() == {"height": 0}

    block = await client.get("/api/v1/blocks/18446744073709551616")
    assert block.status_code == 422


@pytest.mark.asyncio
async def test_failed_mining_releases_idempotency_key(client, accounts, monkeypatch) -> None:
    from fastapi import HTTPException

    from streaming_platform.features.blocks import routes as blocks_routes
    from streaming_platform.platform.services import contract

    class _FakeRedis:
        def __init__(self) -> None:
            self.keys: set[str] = set()

        async def set(self, key: str, value: str, ex: int, nx: bool) -> bool | None:
            if nx and key in self.keys:
                return None
            self.keys.add(key)
            return True

        async def delete(self, key: str) -> int:
            if key in self.keys:
                self.keys.remove(key)
                return 1
            return 0

    fake = _FakeRedis()
    monkeypatch.setattr(blocks_routes, "get_redis", lambda: fake)

    real_mine = contract.mine
    attempts = {"count": 0}

    async def _conflict_once(session, *, sender, calls):
        attempts["count"] += 1
        if attempts["count"] == 1:
            raise HTTPException(status_code=409, detail="Block height conflict")
        return await real_mine(session, sender=sender, calls=calls)

    monkeypatch.setattr(contract, "mine", _conflict_once)

    headers = {**accounts["deployer"]["headers"], "Idempotency-Key": "retry-me"}
    body = {"calls": [{"function": "set-platform-fee", "args": ["u7"]}]}

    first = await client.post("/api/v1/blocks", headers=headers, json=body)
    assert first.status_code == 409
    assert first.json()["detail"] == "Block height conflict"
    assert fake.keys == set()

    retry = await client.post("/api/v1/blocks", headers=headers, json=body)
    assert retry.status_code == 200
    assert retry.json()["receipts"][0]["result"] == "(ok true)"

    replay = await client.post("/api/v1/blocks", headers=headers, json=body)
    assert replay.status_code == 409
    assert replay.json()["detail"] == "Duplicate block submission"
