"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - insert_if_absent is atomic: of N concurrent inserts for one key, exactly one
      succeeds (registry: returns the stored entry, else None; ledger: True/False)
    - RegistryStore.insert_if_absent stamps the entry with clock.now() inside its serialized section,
      so an entry accepted later never carries an earlier registered_at
    - compare_and_swap_owner is atomic per token: it writes only if the stored owner
      still equals `expected_owner`

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy (ADR: ExMA anti-pattern)
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE these protocols are never async themselves —
      the services orchestrate the async calls around the pure logic
    - No update/delete on RegistryStore: write-once is enforced by absence of the operation
"""

from datetime import datetime
from typing import Protocol

from proofpot.core.authorship import AdmittedRegistration, RegistryEntry
from proofpot.core.domain_types import HashKey, Identity, TokenId
from proofpot.core.events import DomainEvent
from proofpot.core.ownership import Token


class RegistryStore(Protocol):
    """Contract for the write-once hash -> (creator, timestamp) table."""
    async def insert_if_absent(
        self, admitted: AdmittedRegistration, clock: "Clock",
    ) -> RegistryEntry | None: ...
    async def get(self, content_hash: HashKey) -> RegistryEntry | None: ...
    async def healthy(self) -> bool: ...


class LedgerStore(Protocol):
    """Contract for the token_id -> token table."""
    async def insert_if_absent(self, token: Token) -> bool: ...
    async def get(self, token_id: TokenId) -> Token | None: ...
    async def compare_and_swap_owner(
        self, token_id: TokenId, expected_owner: Identity, new_owner: Identity,
    ) -> bool: ...
    async def ids_owned_by(self, owner: Identity) -> set[TokenId]: ...
    async def healthy(self) -> bool: ...


class EventPublisher(Protocol):
    """Contract for post-commit event delivery — implemented by shell."""
    async def publish(self, events: tuple[DomainEvent, ...]) -> None: ...


class Clock(Protocol):
    """Source of transaction timestamps. Must never go backwards."""
    def now(self) -> datetime: ...
