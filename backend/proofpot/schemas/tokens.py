"""Token Schemas — Pydantic models for minting, transferring and reading ownership tokens.

Invariants:
    - MintRequest.title: 1-200 chars, stripped, non-empty
    - Every address field is canonicalized (lower-case 0x + 40 hex)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from proofpot.core.domain_types import normalize_identity
from proofpot.core.ownership import MintReceipt, Token


class MintRequest(BaseModel):
    """Mint — creates a token owned by its creator."""
    title: str = Field(min_length=1, max_length=200)
    description: str = Field("", max_length=10_000)
    creator: str

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty or whitespace")
        return v

    @field_validator("creator")
    @classmethod
    def validate_creator(cls, v: str) -> str:
        return normalize_identity(v)


class TransferRequest(BaseModel):
    """Transfer — hands a token to a new owner."""
    to: str

    @field_validator("to")
    @classmethod
    def validate_to(cls, v: str) -> str:
        return normalize_identity(v)


class TokenResponse(BaseModel):
    token_id: UUID
    title: str
    description: str
    creator: str
    owner: str
    created_at: datetime

    @classmethod
    def from_token(cls, token: Token) -> "TokenResponse":
        return cls(
            token_id=token.token_id,
            title=token.title,
            description=token.description,
            creator=token.creator,
            owner=token.owner,
            created_at=token.created_at,
        )


class MintResponse(BaseModel):
    token_id: UUID
    tx_ref: str
    token: TokenResponse

    @classmethod
    def from_receipt(cls, receipt: MintReceipt) -> "MintResponse":
        return cls(
            token_id=receipt.token_id,
            tx_ref=receipt.tx_ref,
            token=TokenResponse.from_token(receipt.token),
        )


class TransferResponse(BaseModel):
    token_id: UUID
    owner: str
    tx_ref: str


class OwnedTokensResponse(BaseModel):
    owner: str
    token_ids: list[UUID]
