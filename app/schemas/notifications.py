"""Notification schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import NotificationStatus


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    contract_id: int
    contract_number: str
    contract_title: str
    type: str
    message: str
    status: NotificationStatus
    created_at: datetime
    read_at: datetime | None = None


class NotificationSettingsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    enabled: bool
    thresholds: list[int]
    recipients: list[str]


class NotificationSettingsUpdateRequest(BaseModel):
    enabled: bool | None = None
    thresholds: list[int] | None = Field(default=None, max_length=20)
    recipients: list[str] | None = Field(default=None, max_length=100)
