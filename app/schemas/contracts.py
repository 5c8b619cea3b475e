"""Contract request/response schemas for API contracts."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import ContractStatus, ContractType


class ContractCreateRequest(BaseModel):
    contract_number: str = Field(min_length=1, max_length=64)
    title: str = Field(min_length=1, max_length=255)
    client_id: int = Field(ge=1)
    supplier_id: int = Field(ge=1)
    client_signer_id: int | None = Field(default=None, ge=1)
    supplier_signer_id: int | None = Field(default=None, ge=1)
    start_date: date
    end_date: date
    amount: Decimal = Field(ge=0, max_digits=14, decimal_places=2)
    type: ContractType = ContractType.SERVICE
    status: ContractStatus = ContractStatus.PENDING
    description: str | None = Field(default=None, max_length=20000)


class ContractUpdateRequest(BaseModel):
    contract_number: str | None = Field(default=None, min_length=1, max_length=64)
    title: str | None = Field(default=None, min_length=1, max_length=255)
    client_id: int | None = Field(default=None, ge=1)
    supplier_id: int | None = Field(default=None, ge=1)
    client_signer_id: int | None = Field(default=None, ge=1)
    supplier_signer_id: int | None = Field(default=None, ge=1)
    start_date: date | None = None
    end_date: date | None = None
    amount: Decimal | None = Field(default=None, ge=0, max_digits=14, decimal_places=2)
    type: ContractType | None = None
    status: ContractStatus | None = None
    description: str | None = Field(default=None, max_length=20000)


class ContractStatusUpdateRequest(BaseModel):
    status: ContractStatus


class ContractResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    contract_number: str
    title: str
    client_id: int | None = None
    supplier_id: int | None = None
    client_name: str | None = None
    supplier_name: str | None = None
    client_signer_id: int | None = None
    supplier_signer_id: int | None = None
    start_date: date
    end_date: date
    amount: Decimal
    type: ContractType
    status: ContractStatus
    description: str | None = None
    created_by: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AuditLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    contract_id: int
    user_id: int
    user_name: str
    action: str
    details: str | None = None
    timestamp: datetime
