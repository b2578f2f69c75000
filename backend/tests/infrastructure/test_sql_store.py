"""SQL stores — registry and ledger behind SQLAlchemy, on in-memory SQLite.

Tests cover:
    - insert_if_absent: primary key decides, the first row is never overwritten
    - datetimes read back as timezone-aware UTC
    - a slow commit cannot let a later-accepted entry carry an earlier timestamp
    - compare_and_swap_owner: succeeds only against the expected owner
    - ids_owned_by follows owner swaps
    - SQL-backed services behave like the in-memory ones (Soup scenario)
"""

import asyncio
from datetime import datetime, timezone
from uuid import uuid4

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from proofpot.core.authorship import AdmittedRegistration, RegistryEntry
from proofpot.core.domain_types import HashKey, Identity, StorageBackend, TokenId
from proofpot.core.errors import DatabaseError, DuplicateHashError, UnauthorizedError
from proofpot.core.ownership import build_token
from proofpot.db.base import Base
from proofpot.infrastructure.clock import MonotonicClock
from proofpot.infrastructure.database import DatabaseSessionManager
from proofpot.infrastructure.sql_store import SqlLedgerStore, SqlRegistryStore
from proofpot.services.provenance_context import build_services
from tests.services.provenance_fixtures import (
    ADMIN, ALICE, BOB, CAROL, HASH_ONE, HASH_TWO, make_settings,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
KEY = HashKey.from_hex(HASH_ONE)
CLOCK = MonotonicClock(source=lambda: NOW)


@pytest.fixture
async def db():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    manager = DatabaseSessionManager(engine=engine)
    yield manager
    await manager.dispose()


# ─── Registry ────────────────────────────────────────────────────

async def test_registry_insert_and_get(db):
    store = SqlRegistryStore(db)

    stored = await store.insert_if_absent(AdmittedRegistration(KEY, Identity(ALICE)), CLOCK)
    assert stored == RegistryEntry(KEY, Identity(ALICE), NOW)
    assert await store.get(KEY) == stored


async def test_registry_insert_never_overwrites(db):
    store = SqlRegistryStore(db)
    await store.insert_if_absent(AdmittedRegistration(KEY, Identity(ALICE)), CLOCK)

    assert await store.insert_if_absent(
        AdmittedRegistration(KEY, Identity(BOB)), CLOCK,
    ) is None
    assert (await store.get(KEY)).creator == ALICE


async def test_registry_get_unknown(db):
    assert await SqlRegistryStore(db).get(KEY) is None


async def test_registry_timestamps_are_utc(db):
    store = SqlRegistryStore(db)
    await store.insert_if_absent(AdmittedRegistration(KEY, Identity(ALICE)), CLOCK)
    assert (await store.get(KEY)).registered_at.tzinfo is not None


async def test_registry_slow_commit_cannot_reorder_timestamps(db, monkeypatch):
    store = SqlRegistryStore(db)
    slow_key = HashKey.from_hex(HASH_ONE)
    fast_key = HashKey.from_hex(HASH_TWO)
    real_commit = AsyncSession.commit

    async def commit(session):
        if any(
            getattr(row, "content_hash", None) == slow_key.hex for row in session.new
        ):
            await asyncio.sleep(0.05)
        await real_commit(session)

    monkeypatch.setattr(AsyncSession, "commit", commit)
    accepted = []

    async def insert(key):
        entry = await store.insert_if_absent(
            AdmittedRegistration(key, Identity(ALICE)), MonotonicClock(),
        )
        accepted.append(entry)

    await asyncio.gather(insert(slow_key), insert(fast_key))

    assert [e.content_hash for e in accepted] == [slow_key, fast_key]
    assert accepted[1].registered_at >= accepted[0].registered_at


async def test_store_health(db):
    assert await SqlRegistryStore(db).healthy()
    assert await SqlLedgerStore(db).healthy()


# ─── Ledger ──────────────────────────────────────────────────────

async def test_ledger_insert_and_get(db):
    store = SqlLedgerStore(db)
    token = build_token(TokenId(uuid4()), "Soup", "desc", Identity(ALICE), NOW)

    assert await store.insert_if_absent(token)
    assert await store.get(token.token_id) == token
    assert not await store.insert_if_absent(token)


async def test_compare_and_swap_owner(db):
    store = SqlLedgerStore(db)
    token = build_token(TokenId(uuid4()), "Soup", "", Identity(ALICE), NOW)
    await store.insert_if_absent(token)

    assert await store.compare_and_swap_owner(token.token_id, ALICE, BOB)
    assert not await store.compare_and_swap_owner(token.token_id, ALICE, CAROL)
    assert (await store.get(token.token_id)).owner == BOB


async def test_compare_and_swap_unknown_token(db):
    assert not await SqlLedgerStore(db).compare_and_swap_owner(
        TokenId(uuid4()), ALICE, BOB,
    )


async def test_ids_owned_by(db):
    store = SqlLedgerStore(db)
    first = build_token(TokenId(uuid4()), "Soup", "", Identity(ALICE), NOW)
    second = build_token(TokenId(uuid4()), "Bread", "", Identity(ALICE), NOW)
    await store.insert_if_absent(first)
    await store.insert_if_absent(second)
    await store.compare_and_swap_owner(first.token_id, ALICE, BOB)

    assert await store.ids_owned_by(Identity(ALICE)) == {second.token_id}
    assert await store.ids_owned_by(Identity(BOB)) == {first.token_id}
    assert await store.ids_owned_by(Identity(CAROL)) == set()


# ─── Services over SQL ───────────────────────────────────────────

async def test_sql_backed_services(db):
    services = build_services(
        make_settings(storage_backend=StorageBackend.DATABASE), db,
    )

    await services.registry.register(KEY, ADMIN, ADMIN)
    with pytest.raises(DuplicateHashError):
        await services.registry.register(KEY, ALICE, ADMIN)
    assert (await services.registry.lookup(KEY)).creator == ADMIN

    t1 = (await services.ledger.mint("Soup", "desc", ALICE)).token_id
    await services.ledger.transfer(t1, BOB, ALICE)
    with pytest.raises(UnauthorizedError):
        await services.ledger.transfer(t1, CAROL, ALICE)
    assert await services.ledger.owner_of(t1) == BOB
    assert await services.healthy()


def test_database_backend_requires_manager():
    with pytest.raises(RuntimeError):
        build_services(make_settings(storage_backend=StorageBackend.DATABASE))


async def test_session_maps_driver_errors(db):
    with pytest.raises(DatabaseError) as exc_info:
        async with db.session() as session:
            await session.execute(text("SELECT * FROM missing_table"))
    assert exc_info.value.operation == "execute"
    assert exc_info.value.http_status == 503


def test_session_manager_requires_url_or_engine():
    with pytest.raises(ValueError):
        DatabaseSessionManager()
