"""Ownership Ledger — mint, transfer and query transferable ownership tokens.

Invariants:
    - Token ids are UUID4, allocated atomically via insert_if_absent
    - A freshly minted token is owned by its creator
    - Only the current owner may transfer; the owner change is a compare-and-swap,
      so concurrent transfers of one token serialize and at most one wins
    - A lost swap is retried once against fresh state (the owner may have gone
      A -> B -> A meanwhile); losing twice is reported as Unauthorized, so transfer
      only ever raises InvalidOwner, TokenNotFound or Unauthorized
    - No burn/delete: tokens stay transferable forever
    - Identities compared in canonical (lower-case) form only

Design Decisions:
    - mint() may suspend (configurable simulated latency) BEFORE the write: once the
      insert starts, nothing awaits that could cancel a half-done mint
    - Transaction refs are random 32-byte hex strings: traceable in logs, not verifiable
      outside this process (ADR: no consensus modeled)
"""

import asyncio
import logging
import secrets
from uuid import uuid4

from proofpot.core.domain_types import (
    Identity, TokenId, TransactionRef, parse_identity,
)
from proofpot.core.errors import (
    ConcurrencyError, TokenNotFoundError, UnauthorizedError,
)
from proofpot.core.ownership import MintReceipt, Token, build_token, check_transfer
from proofpot.core.repository_protocols import Clock, LedgerStore

logger = logging.getLogger(__name__)

_TRANSFER_ATTEMPTS = 2


def new_transaction_ref() -> TransactionRef:
    return TransactionRef("0x" + secrets.token_hex(32))


class OwnershipLedger:
    """Tracks who currently holds each ownership token."""

    def __init__(
        self, store: LedgerStore, clock: Clock, mint_latency_ms: int = 0,
    ):
        self._store = store
        self._clock = clock
        self._mint_latency_ms = mint_latency_ms

    async def mint(
        self, title: str, description: str, creator: Identity | None,
    ) -> MintReceipt:
        creator = parse_identity(creator, "creator")
        token = build_token(
            TokenId(uuid4()), title, description, creator, self._clock.now(),
        )
        if self._mint_latency_ms > 0:
            await asyncio.sleep(self._mint_latency_ms / 1000)

        if not await self._store.insert_if_absent(token):
            raise ConcurrencyError(f"Token id collision for {token.token_id}")

        receipt = MintReceipt(token=token, tx_ref=new_transaction_ref())
        logger.info(
            "Token minted",
            extra={
                "token_id": token.token_id,
                "creator": creator,
                "tx_ref": receipt.tx_ref,
            },
        )
        return receipt

    async def transfer(
        self, token_id: TokenId, to: Identity | None, caller: Identity | None,
    ) -> TransactionRef:
        to = parse_identity(to, "to")
        caller = parse_identity(caller, "caller")
        # Second pass only after a lost swap: re-checks against the winner's state
        for _ in range(_TRANSFER_ATTEMPTS):
            current = await self._store.get(token_id)
            updated = check_transfer(token_id, current, to, caller)
            if await self._store.compare_and_swap_owner(
                token_id, expected_owner=current.owner, new_owner=updated.owner,
            ):
                break
        else:
            raise UnauthorizedError(caller, "transfer this token")

        tx_ref = new_transaction_ref()
        logger.info(
            "Token transferred",
            extra={
                "token_id": token_id,
                "caller": caller,
                "owner": to,
                "tx_ref": tx_ref,
            },
        )
        return tx_ref

    async def owner_of(self, token_id: TokenId) -> Identity:
        token = await self._store.get(token_id)
        if token is None:
            raise TokenNotFoundError(str(token_id))
        return token.owner

    async def tokens_owned_by(self, owner: Identity) -> set[TokenId]:
        return await self._store.ids_owned_by(parse_identity(owner, "owner"))

    async def details(self, token_id: TokenId) -> Token | None:
        return await self._store.get(token_id)

    async def healthy(self) -> bool:
        return await self._store.healthy()
