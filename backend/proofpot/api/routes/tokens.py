"""Token Routes — mint, transfer and query ownership tokens.

Invariants:
    - POST /tokens returns 201 with the token id and a transaction reference
    - Transfers require the X-Caller-Address of the current owner (403 otherwise)
    - Unknown token ids return 404 for every token-scoped route
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status

from proofpot.api.dependencies import get_caller
from proofpot.core.domain_types import Identity, TokenId, parse_identity
from proofpot.core.errors import TokenNotFoundError
from proofpot.schemas.tokens import (
    MintRequest, MintResponse, OwnedTokensResponse, TokenResponse,
    TransferRequest, TransferResponse,
)
from proofpot.services.provenance_context import ProvenanceServices, get_services

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["tokens"])


@router.post(
    "/tokens", response_model=MintResponse,
    status_code=status.HTTP_201_CREATED,
)
async def mint_token(
    body: MintRequest, services: ProvenanceServices = Depends(get_services),
):
    """Mint a token owned by its creator."""
    receipt = await services.ledger.mint(body.title, body.description, body.creator)
    return MintResponse.from_receipt(receipt)


@router.get("/tokens/{token_id}", response_model=TokenResponse)
async def get_token(
    token_id: UUID, services: ProvenanceServices = Depends(get_services),
):
    """Token details."""
    token = await services.ledger.details(TokenId(token_id))
    if token is None:
        raise TokenNotFoundError(str(token_id))
    return TokenResponse.from_token(token)


@router.get("/tokens/{token_id}/owner")
async def get_token_owner(
    token_id: UUID, services: ProvenanceServices = Depends(get_services),
):
    """Current owner of a token."""
    owner = await services.ledger.owner_of(TokenId(token_id))
    return {"token_id": str(token_id), "owner": owner}


@router.post("/tokens/{token_id}/transfer", response_model=TransferResponse)
async def transfer_token(
    token_id: UUID,
    body: TransferRequest,
    caller: Identity | None = Depends(get_caller),
    services: ProvenanceServices = Depends(get_services),
):
    """Hand a token to a new owner. Only the current owner may call this."""
    tx_ref = await services.ledger.transfer(TokenId(token_id), body.to, caller)
    return TransferResponse(token_id=token_id, owner=body.to, tx_ref=tx_ref)


@router.get("/owners/{address}/tokens", response_model=OwnedTokensResponse)
async def list_owned_tokens(
    address: str, services: ProvenanceServices = Depends(get_services),
):
    """Token ids currently held by `address`."""
    owner = parse_identity(address, "owner")
    token_ids = await services.ledger.tokens_owned_by(owner)
    return OwnedTokensResponse(
        owner=owner,
        token_ids=sorted(token_ids, key=str),
    )
