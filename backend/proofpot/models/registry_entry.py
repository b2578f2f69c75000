"""RegistryEntry ORM — persists the write-once content hash -> (creator, timestamp) binding.

Invariants:
    - content_hash is the primary key: the database itself rejects a second insert
    - creator is stored in canonical lower-case form
    - Rows are never updated or deleted by application code

Design Decisions:
    - content_hash stored as its 0x-prefixed hex string (66 chars): readable in psql
      and identical to the API representation (ADR: one wire form everywhere)
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from proofpot.db.base import Base


class RegistryEntryRecord(Base):
    """Authorship proof — who registered a content hash first."""
    __tablename__ = "registry_entries"

    content_hash: Mapped[str] = mapped_column(String(66), primary_key=True)
    creator: Mapped[str] = mapped_column(String(42), nullable=False)
    registered_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
