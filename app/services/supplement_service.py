"""Supplement (amendment) service with audit trail on the parent contract."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from app.core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from app.models import Contract, Supplement
from app.models.enums import SupplementStatus
from app.services import audit_service
from app.services.audit_service import AuditService
from app.services.base_service import BaseService
from app.utils.validators import sanitize_text

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {
    "contract_id",
    "supplement_number",
    "description",
    "effective_date",
    "modifications",
    "status",
    "client_signer_id",
    "supplier_signer_id",
}


class SupplementService(BaseService):
    """Service for supplement CRUD. Audit entries are keyed by the parent contract."""

    def __init__(self, db: Session | None = None) -> None:
        super().__init__(db)
        self.audit = AuditService(db=self.db)

    @staticmethod
    def _coerce(changes: dict[str, Any]) -> dict[str, Any]:
        values = {key: value for key, value in changes.items() if key in EDITABLE_FIELDS}
        if "status" in values and values["status"] is not None:
            try:
                values["status"] = SupplementStatus(values["status"])
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
        return values

    def _validate(self, supplement: Supplement) -> None:
        if not sanitize_text(supplement.supplement_number):
            raise ValidationError("supplement_number is required.")
        if supplement.effective_date is None:
            raise ValidationError("effective_date is required.")
        if self.db.get(Contract, supplement.contract_id) is None:
            raise NotFoundError(f"Contract not found: {supplement.contract_id}")

        query = (
            self.db.query(Supplement.id)
            .filter(Supplement.contract_id == supplement.contract_id)
            .filter(Supplement.supplement_number == supplement.supplement_number)
        )
        if supplement.id is not None:
            query = query.filter(Supplement.id != supplement.id)
        if query.first() is not None:
            raise ConflictError(f"Supplement number already exists on contract: {supplement.supplement_number}")

    def create_supplement(self, data: dict[str, Any], current_user: Any | None) -> Supplement:
        if current_user is None:
            raise AuthenticationError("Creating a supplement requires an authenticated user.")

        supplement = Supplement(**self._coerce(data))
        supplement.created_by = current_user.id
        self._validate(supplement)

        self.db.add(supplement)
        self.db.flush()
        self.audit.add_audit_log(
            supplement.contract_id,
            audit_service.SUPPLEMENT_CREATED,
            f"Supplement {supplement.supplement_number} was created",
            current_user,
            commit=False,
        )
        self.commit()
        return supplement

    def get_supplement(self, supplement_id: int) -> Supplement | None:
        return self.db.get(Supplement, supplement_id)

    def list_supplements(self, contract_id: int | None = None, status: str | None = None) -> list[Supplement]:
        query = self.db.query(Supplement)
        if contract_id is not None:
            query = query.filter(Supplement.contract_id == contract_id)
        if status:
            query = query.filter(Supplement.status == SupplementStatus(status))
        return query.order_by(Supplement.created_at.desc()).all()

    def update_supplement(
        self, supplement_id: int, changes: dict[str, Any], current_user: Any | None
    ) -> Supplement | None:
        if current_user is None:
            raise AuthenticationError("Updating a supplement requires an authenticated user.")
        supplement = self.get_supplement(supplement_id)
        if supplement is None:
            return None

        for key, value in self._coerce(changes).items():
            setattr(supplement, key, value)
        try:
            self._validate(supplement)
        except (ValidationError, ConflictError, NotFoundError):
            self.rollback()
            raise

        self.audit.add_audit_log(
            supplement.contract_id,
            audit_service.SUPPLEMENT_UPDATED,
            f"Supplement {supplement.supplement_number} was updated",
            current_user,
            commit=False,
        )
        self.commit()
        return supplement

    def delete_supplement(self, supplement_id: int, current_user: Any | None) -> bool:
        if current_user is None:
            raise AuthenticationError("Deleting a supplement requires an authenticated user.")
        supplement = self.get_supplement(supplement_id)
        if supplement is None:
            return False

        self.audit.add_audit_log(
            supplement.contract_id,
            audit_service.SUPPLEMENT_DELETED,
            f"Supplement {supplement.supplement_number} was deleted",
            current_user,
            commit=False,
        )
        self.db.delete(supplement)
        self.commit()
        logger.info(
            "supplement.deleted",
            extra={"event": "supplement.deleted", "supplement_id": supplement_id, "user_id": current_user.id},
        )
        return True
