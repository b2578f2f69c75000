"""Registry Schemas — Pydantic models for authorship registration and lookup.

Invariants:
    - content_hash: 0x + 64 hex digits (prefix optional on input), lower-cased
    - creator: 0x + 40 hex digits, lower-cased; optional when the caller is the creator
"""

from datetime import datetime

from pydantic import BaseModel, field_validator

from proofpot.core.authorship import RegistryEntry
from proofpot.core.domain_types import HashKey, normalize_identity


def canonical_hash(v: str) -> str:
    return HashKey.from_hex(v).hex


class RegisterRecipeRequest(BaseModel):
    """Registration — binds a content hash to its creator."""
    content_hash: str
    creator: str | None = None

    @field_validator("content_hash")
    @classmethod
    def validate_hash(cls, v: str) -> str:
        return canonical_hash(v)

    @field_validator("creator")
    @classmethod
    def validate_creator(cls, v: str | None) -> str | None:
        return normalize_identity(v) if v is not None else None

    @property
    def hash_key(self) -> HashKey:
        return HashKey.from_hex(self.content_hash)


class RegistryEntryResponse(BaseModel):
    """Registry entry — public-facing authorship proof."""
    content_hash: str
    creator: str
    registered_at: datetime

    @classmethod
    def from_entry(cls, entry: RegistryEntry) -> "RegistryEntryResponse":
        return cls(
            content_hash=entry.content_hash.hex,
            creator=entry.creator,
            registered_at=entry.registered_at,
        )


class RegistrationStatusResponse(BaseModel):
    """Whether a content hash is already taken (pre-flight check before registering)."""
    content_hash: str
    registered: bool
