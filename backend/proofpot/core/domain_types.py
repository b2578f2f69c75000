"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - HashKey is exactly 32 bytes; equality and ordering by byte value
    - Identity is always in canonical form: lower-case "0x" + 40 hex digits
    - NULL_IDENTITY is the all-zero address; it is never a creator, owner or administrator
    - TokenId wraps UUID — never use bare UUID in domain logic
    - All valid modes encoded as Enums — no raw string matching

Design Decisions:
    - HashKey as frozen dataclass over NewType: width is validated on construction
      and the hex form is derived, never stored twice
    - Identity as NewType over str: the canonical string IS the identity, so
      normalize_identity() is the only constructor boundary code should use
    - str Enums: serialize to JSON without custom encoders (ADR: settings come from env)
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID

from proofpot.core.errors import ValidationError


HASH_KEY_WIDTH = 32
IDENTITY_WIDTH = 20

_HEX_PREFIX = "0x"
_IDENTITY_PATTERN = re.compile(r"^0x[0-9a-f]{40}$")


# ─── Identity Types ──────────────────────────────────────────────

Identity = NewType("Identity", str)
TokenId = NewType("TokenId", UUID)
TransactionRef = NewType("TransactionRef", str)     # "0x" + 64 hex

NULL_IDENTITY = Identity(_HEX_PREFIX + "00" * IDENTITY_WIDTH)


def normalize_identity(raw: str) -> Identity:
    """Canonicalize an address-like identifier. Raises ValueError when malformed."""
    if not isinstance(raw, str):
        raise ValueError("identity must be a string")
    candidate = raw.strip().lower()
    if not candidate.startswith(_HEX_PREFIX):
        candidate = _HEX_PREFIX + candidate
    if not _IDENTITY_PATTERN.match(candidate):
        raise ValueError(
            f"identity must be {IDENTITY_WIDTH} bytes hex-encoded with 0x prefix",
        )
    return Identity(candidate)


def is_null_identity(identity: str | None) -> bool:
    return identity is None or identity == NULL_IDENTITY


@dataclass(frozen=True, order=True)
class HashKey:
    """Opaque 32-byte content hash, used only as a map key."""
    value: bytes

    def __post_init__(self):
        if not isinstance(self.value, bytes):
            raise ValueError("hash key must be bytes")
        if len(self.value) != HASH_KEY_WIDTH:
            raise ValueError(
                f"hash key must be {HASH_KEY_WIDTH} bytes, got {len(self.value)}",
            )

    @classmethod
    def from_hex(cls, raw: str) -> "HashKey":
        text = raw.strip()
        if text[:2].lower() == _HEX_PREFIX:
            text = text[2:]
        if len(text) != HASH_KEY_WIDTH * 2:
            raise ValueError(
                f"hash key must be {HASH_KEY_WIDTH * 2} hex digits",
            )
        try:
            return cls(bytes.fromhex(text))
        except ValueError as e:
            raise ValueError(f"hash key is not valid hex: {raw}") from e

    @property
    def hex(self) -> str:
        return _HEX_PREFIX + self.value.hex()

    def __str__(self) -> str:
        return self.hex


# ─── Enums ───────────────────────────────────────────────────────

class AccessMode(str, Enum):
    """Who may perform gated registry writes — maps to `access_mode` setting."""
    OWNER_GATED = "owner_gated"
    OPEN = "open"


class CreatorSource(str, Enum):
    """Where the registry takes the recorded creator from."""
    EXPLICIT = "explicit"   # caller supplies the creator address
    CALLER = "caller"       # the caller is always the creator


class StorageBackend(str, Enum):
    MEMORY = "memory"
    DATABASE = "database"


def parse_identity(raw: str | None, field: str) -> Identity | None:
    """Boundary helper: canonicalize or raise ValidationError. None passes through."""
    if raw is None:
        return None
    try:
        return normalize_identity(raw)
    except ValueError as e:
        raise ValidationError(str(e), field) from e
