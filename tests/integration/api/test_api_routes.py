from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from app.api.v1 import auth, contracts, health, notifications, reports, users
from app.api.v1.companies import clients_router
from app.auth.jwt import create_token_pair
from app.core.config import get_config
from app.core.security import hash_password
from app.main import create_app
from app.models import Client, Supplier, User
from app.models.enums import UserRole, UserStatus
from app.schemas.auth import LoginRequest, RefreshRequest
from app.schemas.contracts import ContractCreateRequest, ContractUpdateRequest
from app.schemas.notifications import NotificationSettingsUpdateRequest


def _seed_user(session_factory, role: UserRole, status: UserStatus = UserStatus.ACTIVE) -> User:
    with session_factory() as session:
        user = User(
            name=f"{role.value.title()} User",
            email=f"{role.value}@example.com",
            hashed_password=hash_password("s3cret-pass", iterations=1000),
            role=role,
            status=status,
        )
        session.add(user)
        session.commit()
        return user


def _bearer(user: User) -> str:
    tokens = create_token_pair(user_id=user.id, role=user.role.value, secret=get_config().JWT_SECRET)
    return f"Bearer {tokens.access_token}"


def _seed_parties(session_factory) -> tuple[int, int]:
    with session_factory() as session:
        client = Client(name="Acme Corp")
        supplier = Supplier(name="Globex Supplies")
        session.add_all([client, supplier])
        session.commit()
        return client.id, supplier.id


def _contract_payload(client_id: int, supplier_id: int, **overrides) -> ContractCreateRequest:
    values = {
        "contract_number": "C-API-1",
        "title": "Support retainer",
        "client_id": client_id,
        "supplier_id": supplier_id,
        "start_date": date(2026, 1, 1),
        "end_date": datetime.now(timezone.utc).date() + timedelta(days=7),
        "amount": Decimal("2500.00"),
        "type": "service",
        "status": "active",
    }
    values.update(overrides)
    return ContractCreateRequest(**values)


def test_health_endpoint_works(monkeypatch):
    monkeypatch.setattr(health, "verify_database_connection", lambda: True)
    response = health.health()
    assert response["status"] == "ok"
    assert response["service"] == "PACTA"


def test_contract_endpoint_requires_auth(isolated_session_factory):
    with pytest.raises(HTTPException) as exc:
        contracts.list_contracts(status_filter=None, search=None, authorization=None)
    assert exc.value.status_code == 401


def test_viewer_cannot_create_contract(isolated_session_factory):
    viewer = _seed_user(isolated_session_factory, UserRole.VIEWER)
    client_id, supplier_id = _seed_parties(isolated_session_factory)

    with pytest.raises(HTTPException) as exc:
        contracts.create_contract(_contract_payload(client_id, supplier_id), authorization=_bearer(viewer))
    assert exc.value.status_code == 403


def test_inactive_user_token_is_rejected(isolated_session_factory):
    user = _seed_user(isolated_session_factory, UserRole.ADMIN, status=UserStatus.INACTIVE)
    with pytest.raises(HTTPException) as exc:
        contracts.list_contracts(status_filter=None, search=None, authorization=_bearer(user))
    assert exc.value.status_code == 401


def test_contract_lifecycle_through_routes(isolated_session_factory):
    editor = _seed_user(isolated_session_factory, UserRole.EDITOR)
    client_id, supplier_id = _seed_parties(isolated_session_factory)
    token = _bearer(editor)

    created = contracts.create_contract(_contract_payload(client_id, supplier_id), authorization=token)
    assert created.client_name == "Acme Corp"

    updated = contracts.update_contract(
        created.id, ContractUpdateRequest(title="Support retainer v2"), authorization=token
    )
    assert updated.title == "Support retainer v2"

    logs = contracts.contract_audit_logs(created.id, authorization=token)
    assert sorted(log.action for log in logs) == ["Contract Created", "Contract Updated"]
    assert {log.user_name for log in logs} == {"Editor User"}

    with pytest.raises(HTTPException) as exc:
        contracts.delete_contract(created.id, authorization=token)
    assert exc.value.status_code == 403


def test_notification_refresh_and_acknowledge(isolated_session_factory):
    admin = _seed_user(isolated_session_factory, UserRole.ADMIN)
    client_id, supplier_id = _seed_parties(isolated_session_factory)
    token = _bearer(admin)
    contracts.create_contract(_contract_payload(client_id, supplier_id), authorization=token)

    notifications.update_settings(NotificationSettingsUpdateRequest(thresholds=[7]), authorization=token)
    first = notifications.refresh_notifications(authorization=token)
    second = notifications.refresh_notifications(authorization=token)

    assert first["created"] == 1
    assert second["created"] == 0
    assert notifications.unread_count(authorization=token) == {"unread": 1}

    notification_id = first["items"][0].id
    acknowledged = notifications.mark_as_acknowledged(notification_id, authorization=token)
    assert acknowledged.status.value == "acknowledged"
    assert notifications.mark_as_read(notification_id, authorization=token).status.value == "acknowledged"

    with pytest.raises(HTTPException) as exc:
        notifications.mark_as_read("missing", authorization=token)
    assert exc.value.status_code == 404


def test_notification_settings_require_admin(isolated_session_factory):
    manager = _seed_user(isolated_session_factory, UserRole.MANAGER)
    with pytest.raises(HTTPException) as exc:
        notifications.update_settings(NotificationSettingsUpdateRequest(enabled=False), authorization=_bearer(manager))
    assert exc.value.status_code == 403


def test_report_route_builds_status_report(isolated_session_factory):
    admin = _seed_user(isolated_session_factory, UserRole.ADMIN)
    client_id, supplier_id = _seed_parties(isolated_session_factory)
    token = _bearer(admin)
    contracts.create_contract(_contract_payload(client_id, supplier_id), authorization=token)

    report = reports.get_report(
        "client-supplier",
        date_from=None,
        date_to=None,
        status_filter=None,
        type_filter=None,
        client="acme",
        supplier=None,
        amount_min=None,
        amount_max=None,
        authorization=token,
    )
    assert report["data"]["clients"][0]["name"] == "Acme Corp"
    assert report["data"]["total_value"] == 2500


def test_login_and_refresh(isolated_session_factory):
    _seed_user(isolated_session_factory, UserRole.VIEWER)

    tokens = auth.login(LoginRequest(email="viewer@example.com", password="s3cret-pass"))
    refreshed = auth.refresh(RefreshRequest(refresh_token=tokens.refresh_token))
    assert refreshed.access_token

    with pytest.raises(HTTPException) as exc:
        auth.login(LoginRequest(email="viewer@example.com", password="wrong"))
    assert exc.value.status_code == 401

    with pytest.raises(HTTPException) as exc:
        auth.refresh(RefreshRequest(refresh_token=tokens.access_token))
    assert exc.value.status_code == 401


def test_users_route_requires_admin(isolated_session_factory):
    editor = _seed_user(isolated_session_factory, UserRole.EDITOR)
    assert users.current_user(authorization=_bearer(editor)).email == "editor@example.com"
    with pytest.raises(HTTPException) as exc:
        users.list_users(authorization=_bearer(editor))
    assert exc.value.status_code == 403


def test_company_routes_are_registered():
    paths = {route.path for route in clients_router.routes}
    assert {"/clients", "/clients/{company_id}", "/clients/{company_id}/signers"}.issubset(paths)


def test_domain_errors_map_to_http_status(isolated_session_factory):
    admin = _seed_user(isolated_session_factory, UserRole.ADMIN)
    client_id, supplier_id = _seed_parties(isolated_session_factory)
    client = TestClient(create_app())
    headers = {"Authorization": _bearer(admin)}
    body = _contract_payload(client_id, supplier_id).model_dump(mode="json")

    assert client.post("/api/v1/contracts", json=body, headers=headers).status_code == 201
    duplicate = client.post("/api/v1/contracts", json=body, headers=headers)
    assert duplicate.status_code == 409
    assert duplicate.json()["error_code"] == "conflict"

    missing_party = client.post(
        "/api/v1/contracts", json={**body, "contract_number": "C-API-2", "client_id": 999}, headers=headers
    )
    assert missing_party.status_code == 404

    unknown_report = client.get("/api/v1/reports/unknown", headers=headers)
    assert unknown_report.status_code == 422
