"""Client, supplier, signer and document schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import CompanyType


class CompanyCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    address: str | None = Field(default=None, max_length=2000)
    reu_code: str | None = Field(default=None, max_length=64)
    contacts: str | None = Field(default=None, max_length=2000)
    document_url: str | None = Field(default=None, max_length=1024)
    document_key: str | None = Field(default=None, max_length=512)
    document_name: str | None = Field(default=None, max_length=255)


class CompanyUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    address: str | None = Field(default=None, max_length=2000)
    reu_code: str | None = Field(default=None, max_length=64)
    contacts: str | None = Field(default=None, max_length=2000)
    document_url: str | None = Field(default=None, max_length=1024)
    document_key: str | None = Field(default=None, max_length=512)
    document_name: str | None = Field(default=None, max_length=255)


class CompanyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    address: str | None = None
    reu_code: str | None = None
    contacts: str | None = None
    document_url: str | None = None
    document_key: str | None = None
    document_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SignerCreateRequest(BaseModel):
    first_name: str = Field(min_length=1, max_length=120)
    last_name: str = Field(min_length=1, max_length=120)
    position: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=64)
    email: str | None = Field(default=None, max_length=320)
    document_url: str | None = Field(default=None, max_length=1024)
    document_key: str | None = Field(default=None, max_length=512)
    document_name: str | None = Field(default=None, max_length=255)


class SignerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    company_id: int
    company_type: CompanyType
    first_name: str
    last_name: str
    full_name: str
    position: str | None = None
    phone: str | None = None
    email: str | None = None


class DocumentCreateRequest(BaseModel):
    file_name: str = Field(min_length=1, max_length=255)
    file_type: str | None = Field(default=None, max_length=120)
    file_size: int = Field(default=0, ge=0)
    file_url: str | None = Field(default=None, max_length=1024)
    file_key: str | None = Field(default=None, max_length=512)


class DocumentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    contract_id: int
    file_name: str
    file_type: str | None = None
    file_size: int
    file_url: str | None = None
    file_key: str | None = None
    uploaded_by: int | None = None
    uploaded_at: datetime
