from __future__ import annotations

from datetime import date, datetime, timezone
from types import SimpleNamespace

import pytest

from app.core.exceptions import ValidationError
from app.models import Notification
from app.models.enums import NotificationStatus
from app.services.notification_service import (
    MATCH_CATCH_UP,
    MATCH_EXACT,
    NotificationService,
    thresholds_due,
)

NOW = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


def _contract(contract_id: int, end_date: date, status: str = "active"):
    return SimpleNamespace(
        id=contract_id,
        contract_number=f"C-{contract_id:03d}",
        title=f"Lease {contract_id}",
        end_date=end_date,
        status=status,
    )


def _settings(thresholds=(30, 15, 7), enabled=True):
    return SimpleNamespace(enabled=enabled, thresholds=list(thresholds))


def test_thresholds_due_exact_and_catch_up():
    assert thresholds_due(7, [30, 15, 7], MATCH_EXACT) == [7]
    assert thresholds_due(8, [30, 15, 7], MATCH_EXACT) == []
    assert thresholds_due(10, [30, 15, 7], MATCH_CATCH_UP) == [30, 15]
    assert thresholds_due(-1, [30, 15, 7], MATCH_CATCH_UP) == []
    with pytest.raises(ValidationError):
        thresholds_due(7, [7], "fuzzy")


def test_seven_day_contract_gets_single_notification(db_session):
    service = NotificationService(db=db_session)
    created = service.generate_notifications(
        [_contract(1, date(2026, 3, 8))], _settings(), now=NOW, match_mode=MATCH_EXACT
    )

    assert len(created) == 1
    notification = created[0]
    assert notification.type == "expiration_7"
    assert notification.status == NotificationStatus.UNREAD
    assert notification.message == 'Contract "Lease 1" (C-001) will expire in 7 days'
    assert notification.read_at is None


def test_generation_is_idempotent(db_session):
    service = NotificationService(db=db_session)
    contracts = [_contract(1, date(2026, 3, 8))]
    service.generate_notifications(contracts, _settings(), now=NOW, match_mode=MATCH_EXACT)
    second = service.generate_notifications(contracts, _settings(), now=NOW, match_mode=MATCH_EXACT)

    assert second == []
    assert db_session.query(Notification).count() == 1


def test_disabled_settings_create_nothing(db_session):
    service = NotificationService(db=db_session)
    created = service.generate_notifications(
        [_contract(1, date(2026, 3, 8))], _settings(enabled=False), now=NOW, match_mode=MATCH_EXACT
    )
    assert created == []
    assert db_session.query(Notification).count() == 0


def test_only_active_contracts_are_considered(db_session):
    service = NotificationService(db=db_session)
    created = service.generate_notifications(
        [_contract(1, date(2026, 3, 8), status="pending"), _contract(2, date(2026, 3, 8), status="expired")],
        _settings(),
        now=NOW,
        match_mode=MATCH_EXACT,
    )
    assert created == []


def test_duplicate_thresholds_in_one_call_create_one_row(db_session):
    service = NotificationService(db=db_session)
    created = service.generate_notifications(
        [_contract(1, date(2026, 3, 8))], _settings(thresholds=(7, 7)), now=NOW, match_mode=MATCH_EXACT
    )
    assert [n.type for n in created] == ["expiration_7"]


def test_unordered_thresholds_match_exactly(db_session):
    service = NotificationService(db=db_session)
    created = service.generate_notifications(
        [_contract(1, date(2026, 3, 16))], _settings(thresholds=(7, 30, 15)), now=NOW, match_mode=MATCH_EXACT
    )
    assert [n.type for n in created] == ["expiration_15"]


def test_catch_up_mode_picks_up_missed_thresholds(db_session):
    service = NotificationService(db=db_session)
    contracts = [_contract(1, date(2026, 3, 11)), _contract(2, date(2026, 2, 27))]
    created = service.generate_notifications(contracts, _settings(), now=NOW, match_mode=MATCH_CATCH_UP)

    assert sorted((n.contract_id, n.type) for n in created) == [(1, "expiration_15"), (1, "expiration_30")]


def test_lifecycle_moves_forward_only(db_session):
    service = NotificationService(db=db_session)
    (notification,) = service.generate_notifications(
        [_contract(1, date(2026, 3, 8))], _settings(), now=NOW, match_mode=MATCH_EXACT
    )

    read = service.mark_as_read(notification.id)
    assert read.status == NotificationStatus.READ
    assert read.read_at is not None
    first_read_at = read.read_at

    acknowledged = service.mark_as_acknowledged(notification.id)
    assert acknowledged.status == NotificationStatus.ACKNOWLEDGED
    assert acknowledged.read_at == first_read_at

    again = service.mark_as_read(notification.id)
    assert again.status == NotificationStatus.ACKNOWLEDGED


def test_acknowledge_directly_from_unread(db_session):
    service = NotificationService(db=db_session)
    (notification,) = service.generate_notifications(
        [_contract(1, date(2026, 3, 8))], _settings(), now=NOW, match_mode=MATCH_EXACT
    )
    acknowledged = service.mark_as_acknowledged(notification.id)
    assert acknowledged.status == NotificationStatus.ACKNOWLEDGED
    assert acknowledged.read_at is not None


def test_unknown_notification_returns_none(db_session):
    service = NotificationService(db=db_session)
    assert service.mark_as_read("missing") is None
    assert service.mark_as_acknowledged("missing") is None


def test_mark_all_as_read_and_unread_count(db_session):
    service = NotificationService(db=db_session)
    service.generate_notifications(
        [_contract(1, date(2026, 3, 8)), _contract(2, date(2026, 3, 16))], _settings(), now=NOW, match_mode=MATCH_EXACT
    )
    assert service.count_unread() == 2
    assert service.mark_all_as_read() == 2
    assert service.count_unread() == 0
    assert len(service.list_notifications(status="read")) == 2


def test_settings_defaults_and_validation(db_session):
    service = NotificationService(db=db_session)
    settings = service.get_settings()
    assert settings.enabled is True
    assert settings.recipients == []

    updated = service.update_settings(thresholds=[60, 7, 60], recipients=["ops@pacta.local"])
    assert updated.thresholds == [60, 7]
    assert updated.recipients == ["ops@pacta.local"]

    with pytest.raises(ValidationError):
        service.update_settings(recipients=["broken"])
    with pytest.raises(ValidationError):
        service.update_settings(thresholds=[-5])


def test_refresh_reads_active_contracts_from_database(db_session, make_contract):
    make_contract(db_session, number="C-100", end_date=date(2026, 3, 8))
    make_contract(db_session, number="C-101", end_date=date(2026, 3, 8), status="pending")
    service = NotificationService(db=db_session)
    service.update_settings(thresholds=[7])

    created = service.refresh(now=NOW)

    assert [n.contract_number for n in created] == ["C-100"]
