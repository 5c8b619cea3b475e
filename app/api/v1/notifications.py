"""Expiration notification endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Header, HTTPException, Query, status

from app.api.v1._authz import authorize_or_raise
from app.database.db import get_db_session
from app.models.enums import NotificationStatus
from app.schemas.notifications import (
    NotificationResponse,
    NotificationSettingsResponse,
    NotificationSettingsUpdateRequest,
)
from app.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _not_found(notification_id: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Notification not found: {notification_id}")


@router.get("", response_model=list[NotificationResponse])
def list_notifications(
    status_filter: NotificationStatus | None = Query(default=None, alias="status"),
    limit: int = Query(default=50, ge=1, le=500),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> list[NotificationResponse]:
    authorize_or_raise(authorization, "notifications.read")
    with get_db_session() as session:
        rows = NotificationService(db=session).list_notifications(
            status=status_filter.value if status_filter else None,
            limit=limit,
        )
        return [NotificationResponse.model_validate(row) for row in rows]


@router.get("/unread-count")
def unread_count(authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    authorize_or_raise(authorization, "notifications.read")
    with get_db_session() as session:
        return {"unread": NotificationService(db=session).count_unread()}


@router.post("/refresh")
def refresh_notifications(authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    authorize_or_raise(authorization, "notifications.refresh")
    with get_db_session() as session:
        created = NotificationService(db=session).refresh()
        return {"created": len(created), "items": [NotificationResponse.model_validate(row) for row in created]}


@router.post("/read-all")
def mark_all_as_read(authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    authorize_or_raise(authorization, "notifications.update")
    with get_db_session() as session:
        return {"updated": NotificationService(db=session).mark_all_as_read()}


@router.get("/settings", response_model=NotificationSettingsResponse)
def get_settings(authorization: str | None = Header(default=None, alias="Authorization")) -> NotificationSettingsResponse:
    authorize_or_raise(authorization, "notifications.read")
    with get_db_session() as session:
        return NotificationSettingsResponse.model_validate(NotificationService(db=session).get_settings())


@router.put("/settings", response_model=NotificationSettingsResponse)
def update_settings(
    payload: NotificationSettingsUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> NotificationSettingsResponse:
    authorize_or_raise(authorization, "notifications.settings")
    with get_db_session() as session:
        settings = NotificationService(db=session).update_settings(
            enabled=payload.enabled,
            thresholds=payload.thresholds,
            recipients=payload.recipients,
        )
        return NotificationSettingsResponse.model_validate(settings)


@router.post("/{notification_id}/read", response_model=NotificationResponse)
def mark_as_read(
    notification_id: str,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> NotificationResponse:
    authorize_or_raise(authorization, "notifications.update")
    with get_db_session() as session:
        notification = NotificationService(db=session).mark_as_read(notification_id)
        if notification is None:
            raise _not_found(notification_id)
        return NotificationResponse.model_validate(notification)


@router.post("/{notification_id}/acknowledge", response_model=NotificationResponse)
def mark_as_acknowledged(
    notification_id: str,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> NotificationResponse:
    authorize_or_raise(authorization, "notifications.update")
    with get_db_session() as session:
        notification = NotificationService(db=session).mark_as_acknowledged(notification_id)
        if notification is None:
            raise _not_found(notification_id)
        return NotificationResponse.model_validate(notification)
