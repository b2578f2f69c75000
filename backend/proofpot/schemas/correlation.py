"""Correlation Schemas — content id <-> token id association."""

from uuid import UUID

from pydantic import BaseModel, Field


class CorrelationRequest(BaseModel):
    token_id: UUID


class CorrelationResponse(BaseModel):
    content_id: str = Field(min_length=1, max_length=200)
    token_id: UUID
