"""Client and supplier directory endpoints for API v1.

Both resources expose the same routes, so one router is built per company
type. Authorized signers are nested under their company.
"""

from __future__ import annotations

from fastapi import APIRouter, Header, HTTPException, Query, status

from app.api.v1._authz import authorize_or_raise
from app.database.db import get_db_session
from app.models.enums import CompanyType
from app.schemas.common import DeleteResponse
from app.schemas.companies import CompanyCreateRequest, CompanyResponse, CompanyUpdateRequest, SignerCreateRequest, SignerResponse
from app.services.directory_service import CompanyService, SignerService


def build_company_router(company_type: CompanyType) -> APIRouter:
    label = company_type.value
    router = APIRouter(prefix=f"/{label}s", tags=[f"{label}s"])

    def _not_found(company_id: int) -> HTTPException:
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label.capitalize()} not found: {company_id}")

    @router.get("", response_model=list[CompanyResponse])
    def list_companies(
        search: str | None = Query(default=None, max_length=255),
        authorization: str | None = Header(default=None, alias="Authorization"),
    ) -> list[CompanyResponse]:
        authorize_or_raise(authorization, "companies.read")
        with get_db_session() as session:
            rows = CompanyService(company_type, db=session).list_all(search=search)
            return [CompanyResponse.model_validate(row) for row in rows]

    @router.post("", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED)
    def create_company(
        payload: CompanyCreateRequest,
        authorization: str | None = Header(default=None, alias="Authorization"),
    ) -> CompanyResponse:
        user = authorize_or_raise(authorization, "companies.create")
        with get_db_session() as session:
            company = CompanyService(company_type, db=session).create(payload.model_dump(), current_user=user)
            return CompanyResponse.model_validate(company)

    @router.get("/{company_id}", response_model=CompanyResponse)
    def get_company(
        company_id: int,
        authorization: str | None = Header(default=None, alias="Authorization"),
    ) -> CompanyResponse:
        authorize_or_raise(authorization, "companies.read")
        with get_db_session() as session:
            company = CompanyService(company_type, db=session).get(company_id)
            if company is None:
                raise _not_found(company_id)
            return CompanyResponse.model_validate(company)

    @router.patch("/{company_id}", response_model=CompanyResponse)
    def update_company(
        company_id: int,
        payload: CompanyUpdateRequest,
        authorization: str | None = Header(default=None, alias="Authorization"),
    ) -> CompanyResponse:
        user = authorize_or_raise(authorization, "companies.update")
        with get_db_session() as session:
            company = CompanyService(company_type, db=session).update(
                company_id, payload.model_dump(exclude_unset=True), current_user=user
            )
            if company is None:
                raise _not_found(company_id)
            return CompanyResponse.model_validate(company)

    @router.delete("/{company_id}", response_model=DeleteResponse)
    def delete_company(
        company_id: int,
        authorization: str | None = Header(default=None, alias="Authorization"),
    ) -> DeleteResponse:
        user = authorize_or_raise(authorization, "companies.delete")
        with get_db_session() as session:
            if not CompanyService(company_type, db=session).delete(company_id, current_user=user):
                raise _not_found(company_id)
        return DeleteResponse(id=company_id)

    @router.get("/{company_id}/signers", response_model=list[SignerResponse])
    def list_signers(
        company_id: int,
        authorization: str | None = Header(default=None, alias="Authorization"),
    ) -> list[SignerResponse]:
        authorize_or_raise(authorization, "companies.read")
        with get_db_session() as session:
            rows = SignerService(db=session).list_all(company_type=company_type, company_id=company_id)
            return [SignerResponse.model_validate(row) for row in rows]

    @router.post("/{company_id}/signers", response_model=SignerResponse, status_code=status.HTTP_201_CREATED)
    def create_signer(
        company_id: int,
        payload: SignerCreateRequest,
        authorization: str | None = Header(default=None, alias="Authorization"),
    ) -> SignerResponse:
        user = authorize_or_raise(authorization, "companies.create")
        with get_db_session() as session:
            signer = SignerService(db=session).create(
                {**payload.model_dump(), "company_id": company_id, "company_type": company_type},
                current_user=user,
            )
            return SignerResponse.model_validate(signer)

    @router.delete("/{company_id}/signers/{signer_id}", response_model=DeleteResponse)
    def delete_signer(
        company_id: int,
        signer_id: int,
        authorization: str | None = Header(default=None, alias="Authorization"),
    ) -> DeleteResponse:
        user = authorize_or_raise(authorization, "companies.delete")
        with get_db_session() as session:
            service = SignerService(db=session)
            signer = service.get(signer_id)
            if signer is None or signer.company_id != company_id or signer.company_type != company_type:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Signer not found: {signer_id}")
            service.delete(signer_id, current_user=user)
        return DeleteResponse(id=signer_id)

    return router


clients_router = build_company_router(CompanyType.CLIENT)
suppliers_router = build_company_router(CompanyType.SUPPLIER)
