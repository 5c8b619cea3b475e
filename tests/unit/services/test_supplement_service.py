from __future__ import annotations

from datetime import date

import pytest

from app.core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from app.models.enums import SupplementStatus
from app.services.audit_service import AuditService, SUPPLEMENT_CREATED, SUPPLEMENT_DELETED, SUPPLEMENT_UPDATED
from app.services.supplement_service import SupplementService


def _payload(contract_id: int, number: str = "S-1"):
    return {"contract_id": contract_id, "supplement_number": number, "effective_date": date(2026, 6, 1)}


def test_supplement_crud_writes_audit_on_parent(db_session, make_user, make_contract):
    user = make_user(db_session)
    contract = make_contract(db_session)
    service = SupplementService(db=db_session)

    supplement = service.create_supplement(_payload(contract.id), current_user=user)
    assert supplement.status == SupplementStatus.DRAFT

    updated = service.update_supplement(
        supplement.id, {"status": "approved", "modifications": "Extended term"}, current_user=user
    )
    assert updated.status == SupplementStatus.APPROVED

    assert service.delete_supplement(supplement.id, current_user=user) is True
    assert service.get_supplement(supplement.id) is None

    actions = [log.action for log in AuditService(db=db_session).get_contract_audit_logs(contract.id)]
    assert set(actions) == {SUPPLEMENT_CREATED, SUPPLEMENT_UPDATED, SUPPLEMENT_DELETED}


def test_supplement_requires_existing_contract(db_session, make_user):
    user = make_user(db_session)
    with pytest.raises(NotFoundError):
        SupplementService(db=db_session).create_supplement(_payload(404), current_user=user)


def test_supplement_number_unique_per_contract(db_session, make_user, make_contract):
    user = make_user(db_session)
    first = make_contract(db_session, number="C-001")
    second = make_contract(db_session, number="C-002")
    service = SupplementService(db=db_session)
    service.create_supplement(_payload(first.id), current_user=user)
    service.create_supplement(_payload(second.id), current_user=user)

    with pytest.raises(ConflictError):
        service.create_supplement(_payload(first.id), current_user=user)
    assert len(service.list_supplements(contract_id=first.id)) == 1


def test_supplement_validation(db_session, make_user, make_contract):
    user = make_user(db_session)
    contract = make_contract(db_session)
    service = SupplementService(db=db_session)

    with pytest.raises(AuthenticationError):
        service.create_supplement(_payload(contract.id), current_user=None)
    with pytest.raises(ValidationError):
        service.create_supplement({**_payload(contract.id), "status": "void"}, current_user=user)
    with pytest.raises(ValidationError):
        service.create_supplement({**_payload(contract.id), "effective_date": None}, current_user=user)
