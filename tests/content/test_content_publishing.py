import pytest

from conftest import DEPLOYER


def _publish(content_id: int, title: str = "My Video", price: int = 100, premium: bool = False) -> tuple:
    return (
        "publish-content",
        f"u{content_id}",
        f'"{title}"',
        '"A great video"',
        f"u{price}",
        "false",
        '"education"',
        "true" if premium else "false",
    )


@pytest.mark.asyncio
async def test_duplicate_content_id_fails_regardless_of_payload(accounts, mine_block) -> None:
    deployer = accounts["deployer"]

    block = await mine_block(deployer, _publish(1))
    assert block["receipts"][0]["result"] == "(ok true)"

    block = await mine_block(deployer, _publish(1, title="Different Title", price=200, premium=True))
    assert block["receipts"][0]["result"] == "(err u101)"

    block = await mine_block(accounts["wallet_1"], _publish(1))
    assert block["receipts"][0]["result"] == "(err u101)"


@pytest.mark.asyncio
async def test_get_content_renders_tuple(accounts, mine_block, read_only) -> None:
    await mine_block(accounts["deployer"], _publish(7, price=250))

    result = await read_only("get-content", "u7")
    assert result.startswith("(ok {")
    assert "average-rating: u0" in result
    assert f"creator: '{DEPLOYER}" in result
    assert 'title: "My Video"' in result
    assert "price: u250" in result

    assert await read_only("get-content", "u8") == "(err u102)"


@pytest.mark.asyncio
async def test_rest_publish_browse_and_detail(client, accounts) -> None:
    headers = accounts["wallet_1"]["headers"]
    body = {
        "id": 42,
        "title": "Lo-fi beats",
        "description": "Two hours of beats",
        "price": 30,
        "is_nft": True,
        "category": "music",
        "is_premium": False,
    }

    created = await client.post("/api/v1/content", headers=headers, json=body)
    assert created.status_code == 200
    payload = created.json()
    assert payload["creator"] == accounts["wallet_1"]["address"]
    assert payload["is_nft"] is True
    assert payload["average_rating"] == 0
    assert payload["published_at_height"] >= 1

    duplicate = await client.post("/api/v1/content", headers=headers, json={**body, "title": "Other"})
    assert duplicate.status_code == 409
    assert duplicate.json()["code"] == 101

    await client.post(
        "/api/v1/content",
        headers=headers,
        json={**body, "id": 43, "category": "education"},
    )

    music = await client.get("/api/v1/content", params={"category": "music"})
    assert [item["id"] for item in music.json()] == [42]

    everything = await client.get("/api/v1/content")
    assert [item["id"] for item in everything.json()] == [43, 42]

    detail = await client.get("/api/v1/content/42")
    assert detail.status_code == 200
    assert detail.json()["title"] == "Lo-fi beats"

    missing = await client.get("/api/v1/content/999")
    assert missing.status_code == 404
    assert missing.json()["result"] == "(err u102)"


@pytest.mark.asyncio
async def test_purchase_splits_price_with_platform_fee(client, accounts, mine_block, read_only) -> None:
    creator = accounts["wallet_1"]
    buyer = accounts["wallet_2"]

    await mine_block(accounts["deployer"], ("set-platform-fee", "u10"))
    await mine_block(creator, _publish(5, price=1005))

    block = await mine_block(buyer, ("purchase-content", "u5"), ("purchase-content", "u5"))
    assert [r["result"] for r in block["receipts"]] == ["(ok u1005)", "(err u112)"]

    purchases = await client.get("/api/v1/users/me/purchases", headers=buyer["headers"])
    assert purchases.status_code == 200
    [purchase] = purchases.json()
    assert purchase["price_paid"] == 1005
    assert purchase["platform_cut"] == 100
    assert purchase["creator_cut"] == 905

    earnings = await read_only("get-creator-earnings", f"'{creator['address']}")
    assert earnings == "(ok {total-earned: u905, total-sales: u1})"


@pytest.mark.asyncio
async def test_premium_content_requires_active_subscription(client, accounts, mine_block) -> None:
    creator = accounts["wallet_1"]
    viewer = accounts["wallet_2"]

    await mine_block(creator, _publish(9, premium=True))

    denied = await client.post("/api/v1/content/9/purchase", headers=viewer["headers"])
    assert denied.status_code == 402
    assert denied.json()["code"] == 107

    await mine_block(viewer, ("subscribe-to-creator", f"'{creator['address']}", "u10", '"premium"'))

    bought = await client.post("/api/v1/content/9/purchase", headers=viewer["headers"])
    assert bought.status_code == 200
    assert bought.json()["buyer"] == viewer["address"]

    missing = await client.post("/api/v1/content/404/purchase", headers=viewer["headers"])
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_rest_content_inputs_are_bounded(client, accounts) -> None:
    headers = accounts["wallet_1"]["headers"]
    body = {"id": 1, "title": "Track", "description": "Audio", "price": 10, "category": "music"}

    for override in ({"id": 2**64}, {"price": 2**63}, {"title": "t" * 257}, {"category": "c" * 65}):
        response = await client.post("/api/v1/content", headers=headers, json={**body, **override})
        assert response.status_code == 422, override

    detail = await client.get(f"/api/v1/content/{2**64}")
    assert detail.status_code == 422

    purchase = await client.post(f"/api/v1/content/{2**64}/purchase", headers=headers)
    assert purchase.status_code == 422

    published = await client.post("/api/v1/content", headers=headers, json={**body, "title": "t" * 256})
    assert published.status_code == 200
