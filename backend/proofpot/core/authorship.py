"""Authorship Rules — pure admission logic for the write-once registry.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Check order is fixed: InvalidCreator, then Unauthorized, then DuplicateHash
    - A null creator is rejected regardless of access mode or creator source
    - Under CreatorSource.CALLER the recorded creator is always the caller
    - A stored entry yields exactly one RecipeRegistered event
    - The timestamp is NOT chosen here: the store stamps the admitted registration
      inside its serialized insert, so later-accepted entries never carry earlier times

Design Decisions:
    - Duplicate detection takes the existing entry as input: the atomic
      insert-if-absent in the store is authoritative, this check only gives the
      early, cheap answer (ADR: store decides, core explains)
"""

from dataclasses import dataclass
from datetime import datetime

from proofpot.core.access_policy import AccessPolicy, can_register
from proofpot.core.domain_types import (
    CreatorSource, HashKey, Identity, is_null_identity,
)
from proofpot.core.errors import (
    DuplicateHashError, InvalidCreatorError, UnauthorizedError,
)
from proofpot.core.events import RecipeRegistered


@dataclass(frozen=True)
class RegistryEntry:
    """Who registered a content hash first, and when. Never updated."""
    content_hash: HashKey
    creator: Identity
    registered_at: datetime


@dataclass(frozen=True)
class AdmittedRegistration:
    """A registration that passed every check but has no timestamp yet."""
    content_hash: HashKey
    creator: Identity

    def stamp(self, registered_at: datetime) -> RegistryEntry:
        return RegistryEntry(
            content_hash=self.content_hash,
            creator=self.creator,
            registered_at=registered_at,
        )


def resolve_creator(
    creator: Identity | None, caller: Identity | None, source: CreatorSource,
) -> Identity:
    """Pick the identity to record as creator."""
    if source is CreatorSource.CALLER:
        if creator is not None and is_null_identity(creator):
            raise InvalidCreatorError()
        if creator is not None and creator != caller:
            raise UnauthorizedError(caller, "register on behalf of another creator")
        if is_null_identity(caller):
            raise UnauthorizedError(caller, "register recipes")
        return caller
    if is_null_identity(creator):
        raise InvalidCreatorError()
    return creator


def admit_registration(
    content_hash: HashKey,
    creator: Identity | None,
    caller: Identity | None,
    policy: AccessPolicy,
    source: CreatorSource,
    existing: RegistryEntry | None,
) -> AdmittedRegistration:
    """Validate a registration request. The store stamps it on insert."""
    recorded_creator = resolve_creator(creator, caller, source)
    if not can_register(policy, caller):
        raise UnauthorizedError(caller, "register recipes")
    if existing is not None:
        raise DuplicateHashError(content_hash.hex)
    return AdmittedRegistration(content_hash=content_hash, creator=recorded_creator)


def registration_events(entry: RegistryEntry) -> tuple[RecipeRegistered, ...]:
    """Events owed for a stored entry: exactly one RecipeRegistered."""
    return (
        RecipeRegistered(
            content_hash=entry.content_hash,
            creator=entry.creator,
            timestamp=entry.registered_at,
        ),
    )
