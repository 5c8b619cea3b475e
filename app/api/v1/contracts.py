"""Contract endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Header, HTTPException, Query, status

from app.api.v1._authz import authorize_or_raise
from app.database.db import get_db_session
from app.models.enums import ContractStatus
from app.schemas.common import DeleteResponse
from app.schemas.companies import DocumentCreateRequest, DocumentResponse
from app.schemas.contracts import (
    AuditLogResponse,
    ContractCreateRequest,
    ContractResponse,
    ContractStatusUpdateRequest,
    ContractUpdateRequest,
)
from app.schemas.supplements import SupplementResponse
from app.services.audit_service import AuditService
from app.services.contract_service import ContractService
from app.services.directory_service import DocumentService
from app.services.supplement_service import SupplementService

router = APIRouter(prefix="/contracts", tags=["contracts"])


def _not_found(contract_id: int) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Contract not found: {contract_id}")


@router.get("", response_model=list[ContractResponse])
def list_contracts(
    status_filter: ContractStatus | None = Query(default=None, alias="status"),
    search: str | None = Query(default=None, max_length=255),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> list[ContractResponse]:
    authorize_or_raise(authorization, "contracts.read")
    with get_db_session() as session:
        status_value = status_filter.value if status_filter else None
        rows = ContractService(db=session).list_contracts(status=status_value, search=search)
        return [ContractResponse.model_validate(row) for row in rows]


@router.post("", response_model=ContractResponse, status_code=status.HTTP_201_CREATED)
def create_contract(
    payload: ContractCreateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> ContractResponse:
    user = authorize_or_raise(authorization, "contracts.create")
    with get_db_session() as session:
        contract = ContractService(db=session).create_contract(payload.model_dump(), current_user=user)
        return ContractResponse.model_validate(contract)


@router.get("/{contract_id}", response_model=ContractResponse)
def get_contract(contract_id: int, authorization: str | None = Header(default=None, alias="Authorization")) -> ContractResponse:
    authorize_or_raise(authorization, "contracts.read")
    with get_db_session() as session:
        contract = ContractService(db=session).get_contract(contract_id)
        if contract is None:
            raise _not_found(contract_id)
        return ContractResponse.model_validate(contract)


@router.patch("/{contract_id}", response_model=ContractResponse)
def update_contract(
    contract_id: int,
    payload: ContractUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> ContractResponse:
    user = authorize_or_raise(authorization, "contracts.update")
    with get_db_session() as session:
        contract = ContractService(db=session).update_contract(
            contract_id, payload.model_dump(exclude_unset=True), current_user=user
        )
        if contract is None:
            raise _not_found(contract_id)
        return ContractResponse.model_validate(contract)


@router.patch("/{contract_id}/status", response_model=ContractResponse)
def update_contract_status(
    contract_id: int,
    payload: ContractStatusUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> ContractResponse:
    user = authorize_or_raise(authorization, "contracts.update")
    with get_db_session() as session:
        contract = ContractService(db=session).update_status(contract_id, payload.status.value, current_user=user)
        if contract is None:
            raise _not_found(contract_id)
        return ContractResponse.model_validate(contract)


@router.delete("/{contract_id}", response_model=DeleteResponse)
def delete_contract(contract_id: int, authorization: str | None = Header(default=None, alias="Authorization")) -> DeleteResponse:
    user = authorize_or_raise(authorization, "contracts.delete")
    with get_db_session() as session:
        if not ContractService(db=session).delete_contract(contract_id, current_user=user):
            raise _not_found(contract_id)
    return DeleteResponse(id=contract_id)


@router.get("/{contract_id}/audit-logs", response_model=list[AuditLogResponse])
def contract_audit_logs(
    contract_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> list[AuditLogResponse]:
    authorize_or_raise(authorization, "audit.read")
    with get_db_session() as session:
        rows = AuditService(db=session).get_contract_audit_logs(contract_id)
        return [AuditLogResponse.model_validate(row) for row in rows]


@router.get("/{contract_id}/supplements", response_model=list[SupplementResponse])
def contract_supplements(
    contract_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> list[SupplementResponse]:
    authorize_or_raise(authorization, "supplements.read")
    with get_db_session() as session:
        rows = SupplementService(db=session).list_supplements(contract_id=contract_id)
        return [SupplementResponse.model_validate(row) for row in rows]


@router.get("/{contract_id}/documents", response_model=list[DocumentResponse])
def contract_documents(
    contract_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> list[DocumentResponse]:
    authorize_or_raise(authorization, "contracts.read")
    with get_db_session() as session:
        rows = DocumentService(db=session).list_documents(contract_id)
        return [DocumentResponse.model_validate(row) for row in rows]


@router.post("/{contract_id}/documents", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
def add_contract_document(
    contract_id: int,
    payload: DocumentCreateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> DocumentResponse:
    user = authorize_or_raise(authorization, "documents.create")
    with get_db_session() as session:
        document = DocumentService(db=session).add_document(
            {**payload.model_dump(), "contract_id": contract_id}, current_user=user
        )
        return DocumentResponse.model_validate(document)


@router.delete("/{contract_id}/documents/{document_id}", response_model=DeleteResponse)
def delete_contract_document(
    contract_id: int,
    document_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> DeleteResponse:
    user = authorize_or_raise(authorization, "documents.delete")
    with get_db_session() as session:
        service = DocumentService(db=session)
        document = service.get_document(document_id)
        if document is None or document.contract_id != contract_id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Document not found: {document_id}")
        service.delete_document(document_id, current_user=user)
    return DeleteResponse(id=document_id)
