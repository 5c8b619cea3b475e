"""Report endpoints for API v1."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Header, Query

from app.api.v1._authz import authorize_or_raise
from app.database.db import get_db_session
from app.models import Contract, Supplement
from app.services.report_service import REPORT_BUILDERS, ReportFilters, build_report

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("")
def list_report_types(authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    authorize_or_raise(authorization, "reports.read")
    return {"report_types": sorted(REPORT_BUILDERS)}


@router.get("/{report_type}")
def get_report(
    report_type: str,
    date_from: date | None = Query(default=None),
    date_to: date | None = Query(default=None),
    status_filter: str | None = Query(default=None, alias="status"),
    type_filter: str | None = Query(default=None, alias="type"),
    client: str | None = Query(default=None, max_length=255),
    supplier: str | None = Query(default=None, max_length=255),
    amount_min: float | None = Query(default=None, ge=0),
    amount_max: float | None = Query(default=None, ge=0),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    authorize_or_raise(authorization, "reports.read")
    filters = ReportFilters(
        date_from=date_from,
        date_to=date_to,
        status=status_filter,
        type=type_filter,
        client=client,
        supplier=supplier,
        amount_min=amount_min,
        amount_max=amount_max,
    )
    with get_db_session() as session:
        contracts = session.query(Contract).all()
        supplements = session.query(Supplement).all()
        return build_report(report_type, contracts, supplements, filters=filters)
