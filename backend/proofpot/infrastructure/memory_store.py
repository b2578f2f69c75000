"""In-Memory Stores — dict-backed RegistryStore and LedgerStore implementations.

Invariants:
    - Every read-modify-write happens under one threading.Lock per store
      (atomic across event-loop tasks AND OS threads)
    - insert_if_absent never overwrites an existing key
    - Registry entries are stamped under the same lock that admits them, so
      registered_at never decreases in acceptance order
    - compare_and_swap_owner writes only when the stored owner equals expected_owner
    - State is lost on restart

Design Decisions:
    - threading.Lock over asyncio.Lock: no await inside the critical section, so the
      same store is safe when shared by several event loops in several threads
    - Owner index kept alongside the token map: tokens_owned_by is O(result) instead
      of a full scan (ADR: optional secondary index maintained by the ledger itself)
"""

import threading
from collections import defaultdict

from proofpot.core.authorship import AdmittedRegistration, RegistryEntry
from proofpot.core.domain_types import HashKey, Identity, TokenId
from proofpot.core.ownership import Token
from proofpot.core.repository_protocols import Clock


class InMemoryRegistryStore:
    """Write-once hash -> entry map."""

    def __init__(self):
        self._entries: dict[HashKey, RegistryEntry] = {}
        self._lock = threading.Lock()

    async def insert_if_absent(
        self, admitted: AdmittedRegistration, clock: Clock,
    ) -> RegistryEntry | None:
        with self._lock:
            if admitted.content_hash in self._entries:
                return None
            entry = admitted.stamp(clock.now())
            self._entries[entry.content_hash] = entry
            return entry

    async def get(self, content_hash: HashKey) -> RegistryEntry | None:
        with self._lock:
            return self._entries.get(content_hash)

    async def healthy(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._entries)


class InMemoryLedgerStore:
    """token_id -> token map with an owner index."""

    def __init__(self):
        self._tokens: dict[TokenId, Token] = {}
        self._by_owner: defaultdict[Identity, set[TokenId]] = defaultdict(set)
        self._lock = threading.Lock()

    async def insert_if_absent(self, token: Token) -> bool:
        with self._lock:
            if token.token_id in self._tokens:
                return False
            self._tokens[token.token_id] = token
            self._by_owner[token.owner].add(token.token_id)
            return True

    async def get(self, token_id: TokenId) -> Token | None:
        with self._lock:
            return self._tokens.get(token_id)

    async def compare_and_swap_owner(
        self, token_id: TokenId, expected_owner: Identity, new_owner: Identity,
    ) -> bool:
        with self._lock:
            token = self._tokens.get(token_id)
            if token is None or token.owner != expected_owner:
                return False
            self._tokens[token_id] = token.with_owner(new_owner)
            self._by_owner[expected_owner].discard(token_id)
            if not self._by_owner[expected_owner]:
                del self._by_owner[expected_owner]
            self._by_owner[new_owner].add(token_id)
            return True

    async def ids_owned_by(self, owner: Identity) -> set[TokenId]:
        with self._lock:
            return set(self._by_owner.get(owner, ()))

    async def healthy(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._tokens)
