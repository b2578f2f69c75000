"""Authorship Registry — write-once content hash -> (creator, timestamp) service.

Invariants:
    - At most one entry per content hash, for the lifetime of the store
    - A failed register() never mutates the store (first entry untouched)
    - Exactly one RecipeRegistered event per successful register(), published after
      the store insert returned the stored entry
    - A retried register() on an already-registered hash raises DuplicateHashError
    - No internal retries

Design Decisions:
    - Early lookup + atomic insert_if_absent: the lookup gives the fast DuplicateHash
      answer, the insert is authoritative when two requests race for one hash
    - Timestamp taken by the store from an injected MonotonicClock INSIDE its serialized
      insert, never before awaiting it: a slow commit cannot let a later-accepted entry
      carry an earlier registered_at
"""

import logging

from proofpot.core.authorship import (
    RegistryEntry, admit_registration, registration_events,
)
from proofpot.core.domain_types import CreatorSource, HashKey, Identity, parse_identity
from proofpot.core.errors import DuplicateHashError
from proofpot.core.repository_protocols import Clock, EventPublisher, RegistryStore
from proofpot.services.access_control import AccessControl

logger = logging.getLogger(__name__)


class AuthorshipRegistry:
    """Proves who registered a piece of content first."""

    def __init__(
        self,
        store: RegistryStore,
        access: AccessControl,
        events: EventPublisher,
        clock: Clock,
        creator_source: CreatorSource = CreatorSource.EXPLICIT,
    ):
        self._store = store
        self._access = access
        self._events = events
        self._clock = clock
        self.creator_source = creator_source

    async def register(
        self,
        content_hash: HashKey,
        creator: Identity | None,
        caller: Identity | None,
    ) -> RegistryEntry:
        """Bind `content_hash` to its creator. Raises on any constraint violation."""
        creator = parse_identity(creator, "creator")
        caller = parse_identity(caller, "caller")
        existing = await self._store.get(content_hash)
        admitted = admit_registration(
            content_hash,
            creator,
            caller,
            self._access.policy,
            self.creator_source,
            existing,
        )
        entry = await self._store.insert_if_absent(admitted, self._clock)
        if entry is None:
            raise DuplicateHashError(content_hash.hex)

        logger.info(
            "Recipe hash registered",
            extra={
                "content_hash": content_hash.hex,
                "creator": entry.creator,
                "caller": caller,
            },
        )
        await self._events.publish(registration_events(entry))
        return entry

    async def lookup(self, content_hash: HashKey) -> RegistryEntry | None:
        return await self._store.get(content_hash)

    async def is_registered(self, content_hash: HashKey) -> bool:
        return await self._store.get(content_hash) is not None

    async def healthy(self) -> bool:
        return await self._store.healthy()
