"""Token ORM — persists a transferable ownership certificate.

Invariants:
    - token_id is UUID primary key (allocated by the ledger, not the database)
    - owner is the only column application code ever updates
    - owner and creator stored in canonical lower-case form

Design Decisions:
    - owner indexed: serves tokens_owned_by without a full scan
      (ADR: optional secondary index maintained by the ledger itself)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from proofpot.db.base import Base


class TokenRecord(Base):
    """Ownership token — mutable owner layered over immutable content."""
    __tablename__ = "tokens"

    token_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    creator: Mapped[str] = mapped_column(String(42), nullable=False)
    owner: Mapped[str] = mapped_column(String(42), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
