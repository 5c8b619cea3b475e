"""Contract service for contract CRUD with audit trail."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from app.models import Client, Contract, Supplement, Supplier
from app.models.enums import ContractStatus, ContractType
from app.services import audit_service
from app.services.audit_service import AuditService
from app.services.base_service import BaseService
from app.utils.validators import is_non_negative_amount, is_valid_date_range, sanitize_text

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {
    "contract_number",
    "title",
    "client_id",
    "supplier_id",
    "client_signer_id",
    "supplier_signer_id",
    "start_date",
    "end_date",
    "amount",
    "type",
    "status",
    "description",
}


class ContractService(BaseService):
    """Service for contract CRUD. Every mutation writes one audit entry."""

    def __init__(self, db: Session | None = None) -> None:
        super().__init__(db)
        self.audit = AuditService(db=self.db)

    def _validate(self, contract: Contract) -> None:
        if not sanitize_text(contract.contract_number):
            raise ValidationError("contract_number is required.")
        if not sanitize_text(contract.title):
            raise ValidationError("title is required.")
        if not is_valid_date_range(contract.start_date, contract.end_date):
            raise ValidationError("start_date must be on or before end_date.")
        if not is_non_negative_amount(contract.amount):
            raise ValidationError("amount must be a non-negative number.")
        if contract.client_id is not None and self.db.get(Client, contract.client_id) is None:
            raise NotFoundError(f"Client not found: {contract.client_id}")
        if contract.supplier_id is not None and self.db.get(Supplier, contract.supplier_id) is None:
            raise NotFoundError(f"Supplier not found: {contract.supplier_id}")

        query = self.db.query(Contract.id).filter(Contract.contract_number == contract.contract_number)
        if contract.id is not None:
            query = query.filter(Contract.id != contract.id)
        if query.first() is not None:
            raise ConflictError(f"Contract number already exists: {contract.contract_number}")

    @staticmethod
    def _coerce(changes: dict[str, Any]) -> dict[str, Any]:
        values = {key: value for key, value in changes.items() if key in EDITABLE_FIELDS}
        try:
            if "status" in values and values["status"] is not None:
                values["status"] = ContractStatus(values["status"])
            if "type" in values and values["type"] is not None:
                values["type"] = ContractType(values["type"])
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        if "amount" in values and values["amount"] is not None:
            values["amount"] = Decimal(str(values["amount"]))
        return values

    def create_contract(self, data: dict[str, Any], current_user: Any | None) -> Contract:
        if current_user is None:
            raise AuthenticationError("Creating a contract requires an authenticated user.")

        contract = Contract(**self._coerce(data))
        contract.created_by = current_user.id
        self._validate(contract)

        self.db.add(contract)
        self.db.flush()
        self.audit.add_audit_log(
            contract.id,
            audit_service.CONTRACT_CREATED,
            f"Contract {contract.contract_number} was created",
            current_user,
            commit=False,
        )
        self.commit()
        logger.info(
            "contract.created",
            extra={"event": "contract.created", "contract_id": contract.id, "user_id": current_user.id},
        )
        return contract

    def get_contract(self, contract_id: int) -> Contract | None:
        return self.db.get(Contract, contract_id)

    def list_contracts(self, status: str | None = None, search: str | None = None) -> list[Contract]:
        query = self.db.query(Contract)
        if status:
            query = query.filter(Contract.status == ContractStatus(status))
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(or_(Contract.title.ilike(pattern), Contract.contract_number.ilike(pattern)))
        return query.order_by(Contract.created_at.desc()).all()

    def list_by_status(self, status: str) -> list[Contract]:
        return self.list_contracts(status=status)

    def update_contract(self, contract_id: int, changes: dict[str, Any], current_user: Any | None) -> Contract | None:
        if current_user is None:
            raise AuthenticationError("Updating a contract requires an authenticated user.")
        contract = self.get_contract(contract_id)
        if contract is None:
            return None

        for key, value in self._coerce(changes).items():
            setattr(contract, key, value)
        try:
            self._validate(contract)
        except (ValidationError, ConflictError, NotFoundError):
            self.rollback()
            raise

        self.audit.add_audit_log(
            contract.id,
            audit_service.CONTRACT_UPDATED,
            f"Contract {contract.contract_number} was updated",
            current_user,
            commit=False,
        )
        self.commit()
        return contract

    def update_status(self, contract_id: int, status: str, current_user: Any | None) -> Contract | None:
        return self.update_contract(contract_id, {"status": status}, current_user)

    def delete_contract(self, contract_id: int, current_user: Any | None) -> bool:
        """Delete a contract that has no supplements.

        Contracts with supplements are refused with ``ConflictError``; remove
        the supplements first. The audit history is kept.
        """
        if current_user is None:
            raise AuthenticationError("Deleting a contract requires an authenticated user.")
        contract = self.get_contract(contract_id)
        if contract is None:
            return False

        supplement_count = self.db.query(Supplement).filter(Supplement.contract_id == contract_id).count()
        if supplement_count:
            raise ConflictError(
                f"Contract {contract.contract_number} has {supplement_count} supplement(s) and cannot be deleted."
            )

        self.audit.add_audit_log(
            contract.id,
            audit_service.CONTRACT_DELETED,
            f"Contract {contract.contract_number} was deleted",
            current_user,
            commit=False,
        )
        self.db.delete(contract)
        self.commit()
        logger.info(
            "contract.deleted",
            extra={"event": "contract.deleted", "contract_id": contract_id, "user_id": current_user.id},
        )
        return True
