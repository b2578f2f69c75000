"""Ownership Rules — pure token construction and transfer checks for the ledger.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - A freshly minted token is owned by its creator
    - Token.owner is never the null identity
    - Only `owner` changes after mint; every other field is fixed
    - Transfer check order: InvalidOwner, then TokenNotFound, then Unauthorized

Design Decisions:
    - Token is frozen; a transfer produces a copy via with_owner() and the store
      swaps it in with compare-and-swap (ADR: no partial states observable)
"""

from dataclasses import dataclass, replace
from datetime import datetime

from proofpot.core.domain_types import (
    Identity, TokenId, TransactionRef, is_null_identity,
)
from proofpot.core.errors import (
    InvalidCreatorError, InvalidOwnerError, TokenNotFoundError,
    UnauthorizedError, ValidationError,
)


@dataclass(frozen=True)
class Token:
    """Transferable ownership certificate for a piece of content."""
    token_id: TokenId
    title: str
    description: str
    creator: Identity
    owner: Identity
    created_at: datetime

    def with_owner(self, owner: Identity) -> "Token":
        return replace(self, owner=owner)


@dataclass(frozen=True)
class MintReceipt:
    token: Token
    tx_ref: TransactionRef

    @property
    def token_id(self) -> TokenId:
        return self.token.token_id


def build_token(
    token_id: TokenId,
    title: str,
    description: str,
    creator: Identity | None,
    now: datetime,
) -> Token:
    """Validate mint input and build the initial token (owner = creator)."""
    if is_null_identity(creator):
        raise InvalidCreatorError()
    clean_title = (title or "").strip()
    if not clean_title:
        raise ValidationError("title cannot be empty or whitespace", "title")
    return Token(
        token_id=token_id,
        title=clean_title,
        description=description or "",
        creator=creator,
        owner=creator,
        created_at=now,
    )


def check_transfer(
    token_id: TokenId,
    token: Token | None,
    to: Identity | None,
    caller: Identity | None,
) -> Token:
    """Validate a transfer request. Returns the token with its new owner."""
    if is_null_identity(to):
        raise InvalidOwnerError()
    if token is None:
        raise TokenNotFoundError(str(token_id))
    if is_null_identity(caller) or caller != token.owner:
        raise UnauthorizedError(caller, "transfer this token")
    return token.with_owner(to)
