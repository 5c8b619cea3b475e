"""Supplement endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Header, HTTPException, Query, status

from app.api.v1._authz import authorize_or_raise
from app.database.db import get_db_session
from app.models.enums import SupplementStatus
from app.schemas.common import DeleteResponse
from app.schemas.supplements import SupplementCreateRequest, SupplementResponse, SupplementUpdateRequest
from app.services.supplement_service import SupplementService

router = APIRouter(prefix="/supplements", tags=["supplements"])


def _not_found(supplement_id: int) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Supplement not found: {supplement_id}")


@router.get("", response_model=list[SupplementResponse])
def list_supplements(
    contract_id: int | None = Query(default=None, ge=1),
    status_filter: SupplementStatus | None = Query(default=None, alias="status"),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> list[SupplementResponse]:
    authorize_or_raise(authorization, "supplements.read")
    with get_db_session() as session:
        rows = SupplementService(db=session).list_supplements(
            contract_id=contract_id,
            status=status_filter.value if status_filter else None,
        )
        return [SupplementResponse.model_validate(row) for row in rows]


@router.post("", response_model=SupplementResponse, status_code=status.HTTP_201_CREATED)
def create_supplement(
    payload: SupplementCreateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> SupplementResponse:
    user = authorize_or_raise(authorization, "supplements.create")
    with get_db_session() as session:
        supplement = SupplementService(db=session).create_supplement(payload.model_dump(), current_user=user)
        return SupplementResponse.model_validate(supplement)


@router.get("/{supplement_id}", response_model=SupplementResponse)
def get_supplement(
    supplement_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> SupplementResponse:
    authorize_or_raise(authorization, "supplements.read")
    with get_db_session() as session:
        supplement = SupplementService(db=session).get_supplement(supplement_id)
        if supplement is None:
            raise _not_found(supplement_id)
        return SupplementResponse.model_validate(supplement)


@router.patch("/{supplement_id}", response_model=SupplementResponse)
def update_supplement(
    supplement_id: int,
    payload: SupplementUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> SupplementResponse:
    user = authorize_or_raise(authorization, "supplements.update")
    with get_db_session() as session:
        supplement = SupplementService(db=session).update_supplement(
            supplement_id, payload.model_dump(exclude_unset=True), current_user=user
        )
        if supplement is None:
            raise _not_found(supplement_id)
        return SupplementResponse.model_validate(supplement)


@router.delete("/{supplement_id}", response_model=DeleteResponse)
def delete_supplement(
    supplement_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> DeleteResponse:
    user = authorize_or_raise(authorization, "supplements.delete")
    with get_db_session() as session:
        if not SupplementService(db=session).delete_supplement(supplement_id, current_user=user):
            raise _not_found(supplement_id)
    return DeleteResponse(id=supplement_id)
