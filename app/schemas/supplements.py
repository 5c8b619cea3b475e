"""Supplement request/response schemas."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import SupplementStatus


class SupplementCreateRequest(BaseModel):
    contract_id: int = Field(ge=1)
    supplement_number: str = Field(min_length=1, max_length=64)
    description: str | None = Field(default=None, max_length=20000)
    effective_date: date
    modifications: str | None = Field(default=None, max_length=20000)
    status: SupplementStatus = SupplementStatus.DRAFT
    client_signer_id: int | None = Field(default=None, ge=1)
    supplier_signer_id: int | None = Field(default=None, ge=1)


class SupplementUpdateRequest(BaseModel):
    supplement_number: str | None = Field(default=None, min_length=1, max_length=64)
    description: str | None = Field(default=None, max_length=20000)
    effective_date: date | None = None
    modifications: str | None = Field(default=None, max_length=20000)
    status: SupplementStatus | None = None
    client_signer_id: int | None = Field(default=None, ge=1)
    supplier_signer_id: int | None = Field(default=None, ge=1)


class SupplementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    contract_id: int
    supplement_number: str
    description: str | None = None
    effective_date: date
    modifications: str | None = None
    status: SupplementStatus
    client_signer_id: int | None = None
    supplier_signer_id: int | None = None
    created_by: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
