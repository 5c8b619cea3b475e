from __future__ import annotations

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from app.core.exceptions import AuthenticationError
from app.models import AuditLog
from app.services.audit_service import CONTRACT_CREATED, CONTRACT_UPDATED, AuditService


def test_add_audit_log_requires_user(db_session):
    service = AuditService(db=db_session)
    with pytest.raises(AuthenticationError):
        service.add_audit_log(1, CONTRACT_CREATED, "created", current_user=None)
    assert db_session.query(AuditLog).count() == 0


def test_add_audit_log_snapshots_user(db_session):
    service = AuditService(db=db_session)
    user = SimpleNamespace(id=7, name="Dana Ortiz")

    log = service.add_audit_log(3, CONTRACT_CREATED, "Contract C-003 was created", current_user=user)

    assert log.user_id == 7
    assert log.user_name == "Dana Ortiz"
    assert log.contract_id == 3
    assert log.action == CONTRACT_CREATED


def test_contract_audit_logs_newest_first(db_session):
    service = AuditService(db=db_session)
    user = SimpleNamespace(id=1, name="Admin")
    first = service.add_audit_log(5, CONTRACT_CREATED, "created", current_user=user)
    second = service.add_audit_log(5, CONTRACT_UPDATED, "updated", current_user=user)
    service.add_audit_log(6, CONTRACT_CREATED, "other contract", current_user=user)

    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    first.timestamp = base
    second.timestamp = base + timedelta(minutes=5)
    db_session.commit()

    logs = service.get_contract_audit_logs(5)
    assert [log.action for log in logs] == [CONTRACT_UPDATED, CONTRACT_CREATED]
