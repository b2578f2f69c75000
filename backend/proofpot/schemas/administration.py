"""Administration Schemas — access policy snapshot and administrator transfer."""

from pydantic import BaseModel, field_validator

from proofpot.core.domain_types import normalize_identity


class AccessPolicyResponse(BaseModel):
    mode: str
    administrator: str | None = None
    creator_source: str


class AdministratorTransferRequest(BaseModel):
    new_administrator: str

    @field_validator("new_administrator")
    @classmethod
    def validate_new_administrator(cls, v: str) -> str:
        return normalize_identity(v)
