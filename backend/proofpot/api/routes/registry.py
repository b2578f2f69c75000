"""Registry Routes — register content hashes and look up authorship proofs.

Invariants:
    - POST /registry returns 201 with the stored entry, 409 on duplicate hash,
      403 when the caller may not register, 400 on a null creator
    - GET /registry/{content_hash} returns 404 when the hash was never registered
    - GET /registry/{content_hash}/exists answers true/false, never 404
"""

import logging

from fastapi import APIRouter, Depends, status

from proofpot.api.dependencies import get_caller, parse_hash_path
from proofpot.core.domain_types import Identity
from proofpot.core.errors import ResourceNotFoundError
from proofpot.schemas.registry import (
    RegisterRecipeRequest, RegistrationStatusResponse, RegistryEntryResponse,
)
from proofpot.services.provenance_context import ProvenanceServices, get_services

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/registry", tags=["registry"])


@router.post(
    "", response_model=RegistryEntryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_recipe(
    body: RegisterRecipeRequest,
    caller: Identity | None = Depends(get_caller),
    services: ProvenanceServices = Depends(get_services),
):
    """Bind a recipe content hash to its creator (write-once)."""
    entry = await services.registry.register(body.hash_key, body.creator, caller)
    return RegistryEntryResponse.from_entry(entry)


@router.get("/{content_hash}", response_model=RegistryEntryResponse)
async def lookup_recipe(
    content_hash: str,
    services: ProvenanceServices = Depends(get_services),
):
    """Who registered this hash, and when."""
    key = parse_hash_path(content_hash)
    entry = await services.registry.lookup(key)
    if entry is None:
        raise ResourceNotFoundError("Registry entry", key.hex)
    return RegistryEntryResponse.from_entry(entry)


@router.get("/{content_hash}/exists", response_model=RegistrationStatusResponse)
async def recipe_hash_exists(
    content_hash: str,
    services: ProvenanceServices = Depends(get_services),
):
    """Pre-flight check: is this hash already registered?"""
    key = parse_hash_path(content_hash)
    return RegistrationStatusResponse(
        content_hash=key.hex,
        registered=await services.registry.is_registered(key),
    )
