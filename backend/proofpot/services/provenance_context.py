"""Provenance Context — wires stores, policy, clock and event bus into the services.

Invariants:
    - One ProvenanceServices per process, created in the FastAPI lifespan
    - Registry and ledger share the clock and the event bus, never their stores
    - Storage backend chosen by settings.storage_backend only

Design Decisions:
    - Module-level singleton + get_services() dependency: mirrors db_manager/get_db,
      tests swap it through app.dependency_overrides
"""

import logging
from dataclasses import dataclass

from proofpot.config import Settings
from proofpot.core.access_policy import AccessPolicy, Open, OwnerGated
from proofpot.core.domain_types import AccessMode, StorageBackend
from proofpot.infrastructure.clock import MonotonicClock
from proofpot.infrastructure.database import DatabaseSessionManager, init_db
from proofpot.infrastructure.event_bus import EventBus
from proofpot.infrastructure.memory_store import (
    InMemoryLedgerStore, InMemoryRegistryStore,
)
from proofpot.infrastructure.sql_store import SqlLedgerStore, SqlRegistryStore
from proofpot.services.access_control import AccessControl
from proofpot.services.authorship_registry import AuthorshipRegistry
from proofpot.services.correlation_index import CorrelationIndex
from proofpot.services.ownership_ledger import OwnershipLedger

logger = logging.getLogger(__name__)


@dataclass
class ProvenanceServices:
    registry: AuthorshipRegistry
    ledger: OwnershipLedger
    access: AccessControl
    correlations: CorrelationIndex
    events: EventBus

    async def healthy(self) -> bool:
        return (
            await self.registry.healthy()
            and await self.ledger.healthy()
        )


def policy_from_settings(settings: Settings) -> AccessPolicy:
    if settings.access_mode is AccessMode.OPEN:
        return Open()
    return OwnerGated(administrator=settings.administrator)


def build_services(
    settings: Settings, db: DatabaseSessionManager | None = None,
) -> ProvenanceServices:
    """Assemble the service graph. `db` is required for the database backend."""
    events = EventBus()
    clock = MonotonicClock()
    access = AccessControl(policy_from_settings(settings), events)

    if settings.storage_backend is StorageBackend.DATABASE:
        if db is None:
            raise RuntimeError("Database backend selected but database not initialized")
        registry_store = SqlRegistryStore(db)
        ledger_store = SqlLedgerStore(db)
    else:
        registry_store = InMemoryRegistryStore()
        ledger_store = InMemoryLedgerStore()

    return ProvenanceServices(
        registry=AuthorshipRegistry(
            registry_store, access, events, clock,
            creator_source=settings.effective_creator_source,
        ),
        ledger=OwnershipLedger(
            ledger_store, clock, mint_latency_ms=settings.mint_latency_ms,
        ),
        access=access,
        correlations=CorrelationIndex(),
        events=events,
    )


# Singleton (initialized on startup)
services: ProvenanceServices | None = None


def init_services(settings: Settings) -> ProvenanceServices:
    global services
    db = None
    if settings.storage_backend is StorageBackend.DATABASE:
        db = init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
    services = build_services(settings, db)
    logger.info(
        f"Provenance services ready (storage={settings.storage_backend.value}, "
        f"access={settings.access_mode.value}, "
        f"creator_source={settings.effective_creator_source.value})",
    )
    return services


def get_services() -> ProvenanceServices:
    """FastAPI dependency for the provenance services."""
    if not services:
        raise RuntimeError("Provenance services not initialized")
    return services
