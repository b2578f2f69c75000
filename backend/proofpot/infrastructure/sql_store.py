"""SQL Stores — SQLAlchemy-backed RegistryStore and LedgerStore implementations.

Invariants:
    - insert_if_absent relies on the primary-key constraint: a duplicate insert
      rolls back and reports failure (None or False), it never overwrites
    - compare_and_swap_owner is a single conditional UPDATE (owner = expected);
      rowcount decides success, so concurrent transfers of one token serialize in the DB
    - One short session per operation: no transaction spans an await on the caller
    - Datetimes read back are always timezone-aware UTC
    - Registry stamp + commit run under one asyncio.Lock per store: within a process
      an entry committed later never carries an earlier registered_at

Design Decisions:
    - Store maps rows <-> frozen core dataclasses: ORM objects never leak past this module
    - Naive datetimes coerced to UTC on read: SQLite drops tzinfo (ADR: same code path
      in tests and production)
"""

import asyncio
import logging
from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError

from proofpot.core.authorship import AdmittedRegistration, RegistryEntry
from proofpot.core.domain_types import HashKey, Identity, TokenId
from proofpot.core.ownership import Token
from proofpot.core.repository_protocols import Clock
from proofpot.infrastructure.database import DatabaseSessionManager
from proofpot.models.registry_entry import RegistryEntryRecord
from proofpot.models.token import TokenRecord

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _to_entry(row: RegistryEntryRecord) -> RegistryEntry:
    return RegistryEntry(
        content_hash=HashKey.from_hex(row.content_hash),
        creator=Identity(row.creator),
        registered_at=_as_utc(row.registered_at),
    )


def _to_token(row: TokenRecord) -> Token:
    return Token(
        token_id=TokenId(row.token_id),
        title=row.title,
        description=row.description,
        creator=Identity(row.creator),
        owner=Identity(row.owner),
        created_at=_as_utc(row.created_at),
    )


class SqlRegistryStore:
    """registry_entries table behind the RegistryStore protocol."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db
        self._commit_lock = asyncio.Lock()

    async def insert_if_absent(
        self, admitted: AdmittedRegistration, clock: Clock,
    ) -> RegistryEntry | None:
        key = admitted.content_hash.hex
        async with self._commit_lock, self._db.session() as session:
            entry = admitted.stamp(clock.now())
            session.add(RegistryEntryRecord(
                content_hash=key,
                creator=entry.creator,
                registered_at=entry.registered_at,
            ))
            try:
                await session.commit()
            except IntegrityError:
                await session.rollback()
                logger.info(
                    "Registry insert lost to existing row",
                    extra={"content_hash": key},
                )
                return None
        return entry

    async def get(self, content_hash: HashKey) -> RegistryEntry | None:
        async with self._db.session() as session:
            row = await session.get(RegistryEntryRecord, content_hash.hex)
            return _to_entry(row) if row else None

    async def healthy(self) -> bool:
        return await self._db.health_check()


class SqlLedgerStore:
    """tokens table behind the LedgerStore protocol."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def insert_if_absent(self, token: Token) -> bool:
        async with self._db.session() as session:
            session.add(TokenRecord(
                token_id=token.token_id,
                title=token.title,
                description=token.description,
                creator=token.creator,
                owner=token.owner,
                created_at=token.created_at,
            ))
            try:
                await session.commit()
            except IntegrityError:
                await session.rollback()
                return False
        return True

    async def get(self, token_id: TokenId) -> Token | None:
        async with self._db.session() as session:
            row = await session.get(TokenRecord, token_id)
            return _to_token(row) if row else None

    async def compare_and_swap_owner(
        self, token_id: TokenId, expected_owner: Identity, new_owner: Identity,
    ) -> bool:
        async with self._db.session() as session:
            result = await session.execute(
                update(TokenRecord)
                .where(TokenRecord.token_id == token_id)
                .where(TokenRecord.owner == expected_owner)
                .values(owner=new_owner),
            )
            await session.commit()
            return result.rowcount == 1

    async def ids_owned_by(self, owner: Identity) -> set[TokenId]:
        async with self._db.session() as session:
            result = await session.execute(
                select(TokenRecord.token_id).where(TokenRecord.owner == owner),
            )
            return {TokenId(token_id) for token_id in result.scalars().all()}

    async def healthy(self) -> bool:
        return await self._db.health_check()
