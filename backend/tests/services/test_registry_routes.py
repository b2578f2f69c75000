"""Registry routes — HTTP surface of the authorship registry.

Tests cover:
    - POST /api/v1/registry: 201, 409 duplicate, 403 non-admin, 400 null creator
    - GET /api/v1/registry/{hash}: 200 after register, 404 unknown, 400 malformed
    - GET /api/v1/registry/{hash}/exists: registered flag before and after
    - structured error body (code, category, severity)
"""

from tests.services.provenance_fixtures import (
    ADMIN, ALICE, BOB, HASH_ONE, HASH_TWO, NULL,
)

CALLER = "X-Caller-Address"


async def test_register_recipe(client):
    response = await client.post(
        "/api/v1/registry",
        json={"content_hash": HASH_ONE, "creator": ALICE},
        headers={CALLER: ADMIN},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["content_hash"] == HASH_ONE
    assert body["creator"] == ALICE
    assert body["registered_at"]


async def test_lookup_after_register(client):
    await client.post(
        "/api/v1/registry",
        json={"content_hash": HASH_ONE, "creator": ADMIN},
        headers={CALLER: ADMIN},
    )
    response = await client.get(f"/api/v1/registry/{HASH_ONE}")
    assert response.status_code == 200
    assert response.json()["creator"] == ADMIN


async def test_lookup_accepts_unprefixed_upper_case_hash(client):
    await client.post(
        "/api/v1/registry",
        json={"content_hash": HASH_ONE, "creator": ADMIN},
        headers={CALLER: ADMIN},
    )
    response = await client.get(f"/api/v1/registry/{HASH_ONE[2:].upper()}")
    assert response.status_code == 200
    assert response.json()["content_hash"] == HASH_ONE


async def test_duplicate_registration_is_conflict(client):
    first = await client.post(
        "/api/v1/registry",
        json={"content_hash": HASH_ONE, "creator": ADMIN},
        headers={CALLER: ADMIN},
    )
    second = await client.post(
        "/api/v1/registry",
        json={"content_hash": HASH_ONE, "creator": "0x" + "22" * 20},
        headers={CALLER: ADMIN},
    )
    assert second.status_code == 409
    error = second.json()["error"]
    assert error["code"] == "DUPLICATE_HASH"
    assert error["category"] == "conflict"
    assert error["context"]["content_hash"] == HASH_ONE

    lookup = await client.get(f"/api/v1/registry/{HASH_ONE}")
    assert lookup.json() == first.json()


async def test_non_admin_is_forbidden(client):
    response = await client.post(
        "/api/v1/registry",
        json={"content_hash": HASH_ONE, "creator": ALICE},
        headers={CALLER: BOB},
    )
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


async def test_missing_caller_header_is_forbidden(client):
    response = await client.post(
        "/api/v1/registry", json={"content_hash": HASH_ONE, "creator": ALICE},
    )
    assert response.status_code == 403


async def test_malformed_caller_header_is_bad_request(client):
    response = await client.post(
        "/api/v1/registry",
        json={"content_hash": HASH_ONE, "creator": ALICE},
        headers={CALLER: "nobody"},
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_null_creator_is_bad_request(client):
    response = await client.post(
        "/api/v1/registry",
        json={"content_hash": HASH_ONE, "creator": NULL},
        headers={CALLER: ADMIN},
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_CREATOR"


async def test_malformed_hash_in_body(client):
    response = await client.post(
        "/api/v1/registry",
        json={"content_hash": "0x1234", "creator": ALICE},
        headers={CALLER: ADMIN},
    )
    assert response.status_code == 400
    assert response.json()["error"]["details"][0]["field"] == "body.content_hash"


async def test_lookup_unknown_hash(client):
    response = await client.get(f"/api/v1/registry/{HASH_TWO}")
    assert response.status_code == 404


async def test_lookup_malformed_hash(client):
    response = await client.get("/api/v1/registry/not-a-hash")
    assert response.status_code == 400


async def test_open_mode_registers_caller_as_creator(open_client):
    response = await open_client.post(
        "/api/v1/registry",
        json={"content_hash": HASH_ONE},
        headers={CALLER: BOB},
    )
    assert response.status_code == 201
    assert response.json()["creator"] == BOB


async def test_exists_reports_registration_status(client):
    before = await client.get(f"/api/v1/registry/{HASH_ONE}/exists")
    assert before.status_code == 200
    assert before.json() == {"content_hash": HASH_ONE, "registered": False}

    await client.post(
        "/api/v1/registry",
        json={"content_hash": HASH_ONE, "creator": ALICE},
        headers={CALLER: ADMIN},
    )
    after = await client.get(f"/api/v1/registry/{HASH_ONE}/exists")
    assert after.json() == {"content_hash": HASH_ONE, "registered": True}


async def test_exists_rejects_malformed_hash(client):
    response = await client.get("/api/v1/registry/0x12/exists")
    assert response.status_code == 400
