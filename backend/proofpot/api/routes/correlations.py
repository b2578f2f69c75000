"""Correlation Routes — client-side content id -> token id lookups.

Invariants:
    - PUT overwrites any previous association (last write wins)
    - GET returns 404 when no token was associated with the content id
    - Associations live in memory only and vanish on restart
"""

from fastapi import APIRouter, Depends, Path

from proofpot.core.domain_types import TokenId
from proofpot.core.errors import ResourceNotFoundError
from proofpot.schemas.correlation import CorrelationRequest, CorrelationResponse
from proofpot.services.provenance_context import ProvenanceServices, get_services

router = APIRouter(prefix="/api/v1/correlations", tags=["correlations"])


@router.put("/{content_id}", response_model=CorrelationResponse)
async def associate_token(
    body: CorrelationRequest,
    content_id: str = Path(min_length=1, max_length=200),
    services: ProvenanceServices = Depends(get_services),
):
    services.correlations.associate(content_id, TokenId(body.token_id))
    return CorrelationResponse(content_id=content_id, token_id=body.token_id)


@router.get("/{content_id}", response_model=CorrelationResponse)
async def token_for_content(
    content_id: str = Path(min_length=1, max_length=200),
    services: ProvenanceServices = Depends(get_services),
):
    token_id = services.correlations.token_for(content_id)
    if token_id is None:
        raise ResourceNotFoundError("Correlation", content_id)
    return CorrelationResponse(content_id=content_id, token_id=token_id)
