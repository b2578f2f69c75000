"""Token routes — HTTP surface of the ownership ledger."""

from uuid import uuid4

from tests.services.provenance_fixtures import ALICE, BOB, CAROL, NULL

CALLER = "X-Caller-Address"


async def _mint(client, creator=ALICE, title="Soup"):
    response = await client.post(
        "/api/v1/tokens",
        json={"title": title, "description": "desc", "creator": creator},
    )
    assert response.status_code == 201
    return response.json()


async def test_mint_token(client):
    body = await _mint(client)
    assert body["token"]["owner"] == ALICE
    assert body["token"]["title"] == "Soup"
    assert body["tx_ref"].startswith("0x")
    assert body["token_id"] == body["token"]["token_id"]


async def test_mint_rejects_blank_title(client):
    response = await client.post(
        "/api/v1/tokens", json={"title": "   ", "creator": ALICE},
    )
    assert response.status_code == 400


async def test_mint_rejects_null_creator(client):
    response = await client.post(
        "/api/v1/tokens", json={"title": "Soup", "creator": NULL},
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_CREATOR"


async def test_get_token_and_owner(client):
    token_id = (await _mint(client))["token_id"]

    details = await client.get(f"/api/v1/tokens/{token_id}")
    assert details.status_code == 200
    assert details.json()["creator"] == ALICE

    owner = await client.get(f"/api/v1/tokens/{token_id}/owner")
    assert owner.json() == {"token_id": token_id, "owner": ALICE}


async def test_unknown_token_is_not_found(client):
    missing = uuid4()
    assert (await client.get(f"/api/v1/tokens/{missing}")).status_code == 404
    response = await client.get(f"/api/v1/tokens/{missing}/owner")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "TOKEN_NOT_FOUND"


async def test_soup_scenario_over_http(client):
    token_id = (await _mint(client))["token_id"]

    moved = await client.post(
        f"/api/v1/tokens/{token_id}/transfer",
        json={"to": BOB}, headers={CALLER: ALICE},
    )
    assert moved.status_code == 200
    assert moved.json()["owner"] == BOB

    stale = await client.post(
        f"/api/v1/tokens/{token_id}/transfer",
        json={"to": CAROL}, headers={CALLER: ALICE},
    )
    assert stale.status_code == 403

    owner = await client.get(f"/api/v1/tokens/{token_id}/owner")
    assert owner.json()["owner"] == BOB


async def test_transfer_to_null_is_bad_request(client):
    token_id = (await _mint(client))["token_id"]
    response = await client.post(
        f"/api/v1/tokens/{token_id}/transfer",
        json={"to": NULL}, headers={CALLER: ALICE},
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_OWNER"


async def test_transfer_unknown_token(client):
    response = await client.post(
        f"/api/v1/tokens/{uuid4()}/transfer",
        json={"to": BOB}, headers={CALLER: ALICE},
    )
    assert response.status_code == 404


async def test_transfer_without_caller_is_forbidden(client):
    token_id = (await _mint(client))["token_id"]
    response = await client.post(
        f"/api/v1/tokens/{token_id}/transfer", json={"to": BOB},
    )
    assert response.status_code == 403


async def test_tokens_owned_by(client):
    first = (await _mint(client))["token_id"]
    second = (await _mint(client, title="Bread"))["token_id"]
    await client.post(
        f"/api/v1/tokens/{first}/transfer",
        json={"to": BOB}, headers={CALLER: ALICE},
    )

    alice = await client.get(f"/api/v1/owners/{ALICE.upper().replace('0X', '0x')}/tokens")
    assert alice.status_code == 200
    assert alice.json() == {"owner": ALICE, "token_ids": [second]}

    bob = await client.get(f"/api/v1/owners/{BOB}/tokens")
    assert bob.json()["token_ids"] == [first]


async def test_tokens_owned_by_malformed_address(client):
    response = await client.get("/api/v1/owners/0x1234/tokens")
    assert response.status_code == 400
