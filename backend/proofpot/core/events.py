"""Domain Events — immutable records of committed state transitions.

Invariants:
    - Events are created only for writes that succeeded
    - Events are published after the write commits, never before
    - to_payload() is JSON-serializable

Design Decisions:
    - Events returned alongside results instead of pushed from inside the core:
      core stays testable without a live bus (ADR: functional core, imperative shell)
"""

from dataclasses import dataclass
from datetime import datetime

from proofpot.core.domain_types import HashKey, Identity


@dataclass(frozen=True)
class RecipeRegistered:
    content_hash: HashKey
    creator: Identity
    timestamp: datetime

    name = "RecipeRegistered"

    def to_payload(self) -> dict:
        return {
            "event": self.name,
            "content_hash": self.content_hash.hex,
            "creator": self.creator,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class AdministratorTransferred:
    previous_administrator: Identity
    new_administrator: Identity

    name = "AdministratorTransferred"

    def to_payload(self) -> dict:
        return {
            "event": self.name,
            "previous_administrator": self.previous_administrator,
            "new_administrator": self.new_administrator,
        }


DomainEvent = RecipeRegistered | AdministratorTransferred
