"""Access Control — holds the live AccessPolicy and serializes administrator transfers.

Invariants:
    - policy is replaced atomically (reference swap under a lock), never mutated
    - AdministratorTransferred published only after the swap
    - Policy state is process-local, initialized from settings at startup

Design Decisions:
    - Pure decision in core/access_policy.py; this class only adds locking and events
"""

import logging
import threading

from proofpot.core.access_policy import (
    AccessPolicy, OwnerGated, can_register, describe_policy, transfer_administrator,
)
from proofpot.core.domain_types import Identity, parse_identity
from proofpot.core.events import AdministratorTransferred
from proofpot.core.repository_protocols import EventPublisher

logger = logging.getLogger(__name__)


class AccessControl:
    """Process-wide owner of the registry's AccessPolicy."""

    def __init__(self, policy: AccessPolicy, events: EventPublisher):
        self._policy = policy
        self._events = events
        self._lock = threading.Lock()

    @property
    def policy(self) -> AccessPolicy:
        return self._policy

    def can_register(self, caller: Identity | None) -> bool:
        return can_register(self._policy, parse_identity(caller, "caller"))

    async def transfer_administrator(
        self, new_admin: Identity | None, caller: Identity | None,
    ) -> OwnerGated:
        new_admin = parse_identity(new_admin, "new_administrator")
        caller = parse_identity(caller, "caller")
        with self._lock:
            previous = self._policy
            updated = transfer_administrator(previous, new_admin, caller)
            self._policy = updated

        logger.info(
            "Administrator transferred",
            extra={"caller": caller, "owner": updated.administrator},
        )
        await self._events.publish((
            AdministratorTransferred(
                previous_administrator=previous.administrator,
                new_administrator=updated.administrator,
            ),
        ))
        return updated

    def describe(self) -> dict:
        return describe_policy(self._policy)
