"""Administration Routes — inspect the access policy and hand over the administrator role.

Invariants:
    - Only the current administrator may transfer the role (403 otherwise)
    - A null new administrator is rejected (400), never silently accepted
    - Under open access there is no administrator: every transfer is 403
"""

import logging

from fastapi import APIRouter, Depends

from proofpot.api.dependencies import get_caller
from proofpot.core.domain_types import Identity
from proofpot.schemas.administration import (
    AccessPolicyResponse, AdministratorTransferRequest,
)
from proofpot.services.provenance_context import ProvenanceServices, get_services

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/access-policy", tags=["administration"])


def _policy_response(services: ProvenanceServices) -> AccessPolicyResponse:
    snapshot = services.access.describe()
    return AccessPolicyResponse(
        mode=snapshot["mode"],
        administrator=snapshot["administrator"],
        creator_source=services.registry.creator_source.value,
    )


@router.get("", response_model=AccessPolicyResponse)
async def get_access_policy(
    services: ProvenanceServices = Depends(get_services),
):
    """Current access mode and administrator."""
    return _policy_response(services)


@router.post("/administrator", response_model=AccessPolicyResponse)
async def transfer_administrator(
    body: AdministratorTransferRequest,
    caller: Identity | None = Depends(get_caller),
    services: ProvenanceServices = Depends(get_services),
):
    """Designate the next administrator."""
    await services.access.transfer_administrator(body.new_administrator, caller)
    return _policy_response(services)
