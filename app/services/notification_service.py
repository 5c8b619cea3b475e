"""Expiration notification generation and lifecycle service."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any, Protocol

from app.core.config import get_config
from app.core.exceptions import ValidationError
from app.core.state_machine import NOTIFICATION_LIFECYCLE
from app.models import Contract, Notification, NotificationSettings
from app.models.enums import ContractStatus, NotificationStatus, value_of
from app.models.notification import SETTINGS_ROW_ID
from app.services.base_service import BaseService
from app.utils.dates import days_until
from app.utils.ids import new_record_id
from app.utils.validators import is_valid_email, normalize_thresholds

logger = logging.getLogger(__name__)

MATCH_EXACT = "exact"
MATCH_CATCH_UP = "catch_up"


class SettingsLike(Protocol):
    enabled: bool
    thresholds: list[int]


def notification_type(threshold: int) -> str:
    return f"expiration_{int(threshold)}"


def build_message(contract: Any, threshold: int) -> str:
    return f'Contract "{contract.title}" ({contract.contract_number}) will expire in {threshold} days'


def thresholds_due(days: int, thresholds: Iterable[int], match_mode: str = MATCH_EXACT) -> list[int]:
    """Thresholds that fire for a contract ``days`` away from expiring.

    ``exact`` fires only on the day the threshold is reached. ``catch_up``
    fires for every threshold already crossed while the contract has not
    expired yet, so a missed day is picked up on the next run.
    """
    if match_mode == MATCH_EXACT:
        return [threshold for threshold in thresholds if days == threshold]
    if match_mode == MATCH_CATCH_UP:
        if days < 0:
            return []
        return [threshold for threshold in thresholds if days <= threshold]
    raise ValidationError(f"Unknown notification match mode: {match_mode}")


class NotificationService(BaseService):
    """Service for expiration alerts and their read/acknowledge lifecycle."""

    def get_settings(self) -> NotificationSettings:
        """Return the settings row, creating the defaults on first access."""
        settings = self.db.get(NotificationSettings, SETTINGS_ROW_ID)
        if settings is None:
            settings = NotificationSettings(
                id=SETTINGS_ROW_ID,
                enabled=True,
                thresholds=list(get_config().NOTIFICATION_DEFAULT_THRESHOLDS),
                recipients=[],
            )
            self.db.add(settings)
            self.commit()
        return settings

    def update_settings(
        self,
        enabled: bool | None = None,
        thresholds: list[int] | None = None,
        recipients: list[str] | None = None,
    ) -> NotificationSettings:
        settings = self.get_settings()
        if enabled is not None:
            settings.enabled = enabled
        if thresholds is not None:
            try:
                settings.thresholds = normalize_thresholds(thresholds)
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
        if recipients is not None:
            invalid = [email for email in recipients if not is_valid_email(email)]
            if invalid:
                raise ValidationError(f"Invalid recipient emails: {', '.join(invalid)}")
            settings.recipients = [email.strip() for email in recipients]
        self.commit()
        logger.info(
            "notification.settings.updated",
            extra={
                "event": "notification.settings.updated",
                "enabled": settings.enabled,
                "thresholds": settings.thresholds,
            },
        )
        return settings

    def _existing_keys(self, contract_ids: list[int]) -> set[tuple[int, str]]:
        if not contract_ids:
            return set()
        rows = (
            self.db.query(Notification.contract_id, Notification.type)
            .filter(Notification.contract_id.in_(contract_ids))
            .all()
        )
        return {(row.contract_id, row.type) for row in rows}

    def generate_notifications(
        self,
        contracts: Iterable[Any],
        settings: SettingsLike,
        now: datetime | None = None,
        match_mode: str | None = None,
    ) -> list[Notification]:
        """Create missing expiration alerts for active contracts.

        A notification is unique per ``(contract_id, expiration_<threshold>)``;
        existing rows are never touched. Returns only the rows created by
        this call.
        """
        if not settings.enabled:
            logger.debug("notification.generate.disabled", extra={"event": "notification.generate.disabled"})
            return []

        mode = match_mode or get_config().NOTIFICATION_MATCH_MODE
        reference = now or datetime.now(timezone.utc)
        active = [c for c in contracts if value_of(c.status) == ContractStatus.ACTIVE.value]
        existing = self._existing_keys([c.id for c in active])

        created: list[Notification] = []
        for contract in active:
            days = days_until(contract.end_date, now=reference)
            for threshold in thresholds_due(days, settings.thresholds, match_mode=mode):
                key = (contract.id, notification_type(threshold))
                if key in existing:
                    continue
                notification = Notification(
                    id=new_record_id(),
                    contract_id=contract.id,
                    contract_number=contract.contract_number,
                    contract_title=contract.title,
                    type=key[1],
                    message=build_message(contract, threshold),
                    status=NotificationStatus.UNREAD,
                    created_at=reference,
                )
                self.db.add(notification)
                existing.add(key)
                created.append(notification)

        if created:
            self.commit()
        logger.info(
            "notification.generate.completed",
            extra={
                "event": "notification.generate.completed",
                "active_contracts": len(active),
                "created": len(created),
                "match_mode": mode,
            },
        )
        return created

    def refresh(self, now: datetime | None = None) -> list[Notification]:
        """Run the generator over every active contract with stored settings."""
        contracts = self.db.query(Contract).filter(Contract.status == ContractStatus.ACTIVE).all()
        return self.generate_notifications(contracts, self.get_settings(), now=now)

    def get_notification(self, notification_id: str) -> Notification | None:
        return self.db.get(Notification, notification_id)

    def list_notifications(self, status: str | None = None, limit: int | None = None) -> list[Notification]:
        query = self.db.query(Notification)
        if status is not None:
            query = query.filter(Notification.status == NotificationStatus(status))
        query = query.order_by(Notification.created_at.desc())
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def count_unread(self) -> int:
        return self.db.query(Notification).filter(Notification.status == NotificationStatus.UNREAD).count()

    def _advance(self, notification_id: str, target: NotificationStatus) -> Notification | None:
        notification = self.get_notification(notification_id)
        if notification is None:
            return None

        current = value_of(notification.status)
        if current == target.value:
            return notification
        if not NOTIFICATION_LIFECYCLE.can_transition(current, target.value):
            logger.info(
                "notification.transition.ignored",
                extra={
                    "event": "notification.transition.ignored",
                    "notification_id": notification_id,
                    "from_status": current,
                    "to_status": target.value,
                },
            )
            return notification

        notification.status = target
        if notification.read_at is None:
            notification.read_at = datetime.now(timezone.utc)
        self.commit()
        return notification

    def mark_as_read(self, notification_id: str) -> Notification | None:
        return self._advance(notification_id, NotificationStatus.READ)

    def mark_as_acknowledged(self, notification_id: str) -> Notification | None:
        return self._advance(notification_id, NotificationStatus.ACKNOWLEDGED)

    def mark_all_as_read(self) -> int:
        unread = self.db.query(Notification).filter(Notification.status == NotificationStatus.UNREAD).all()
        read_at = datetime.now(timezone.utc)
        for notification in unread:
            notification.status = NotificationStatus.READ
            notification.read_at = read_at
        if unread:
            self.commit()
        return len(unread)
