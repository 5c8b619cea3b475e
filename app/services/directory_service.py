"""Directory services for clients, suppliers, authorized signers and documents."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from app.core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from app.models import AuthorizedSigner, Client, Contract, Document, Supplier
from app.models.enums import CompanyType
from app.services import audit_service
from app.services.audit_service import AuditService
from app.services.base_service import BaseService
from app.utils.validators import is_valid_email, sanitize_text

logger = logging.getLogger(__name__)

COMPANY_FIELDS = {"name", "address", "reu_code", "contacts", "document_url", "document_key", "document_name"}
SIGNER_FIELDS = {
    "company_id",
    "company_type",
    "first_name",
    "last_name",
    "position",
    "phone",
    "email",
    "document_url",
    "document_key",
    "document_name",
}
DOCUMENT_FIELDS = {"contract_id", "file_name", "file_type", "file_size", "file_url", "file_key"}

COMPANY_MODELS: dict[CompanyType, type[Client] | type[Supplier]] = {
    CompanyType.CLIENT: Client,
    CompanyType.SUPPLIER: Supplier,
}


def _require_user(current_user: Any | None, action: str) -> None:
    if current_user is None:
        raise AuthenticationError(f"{action} requires an authenticated user.")


def _company_type(value: CompanyType | str) -> CompanyType:
    try:
        return CompanyType(value)
    except ValueError as exc:
        raise ValidationError(f"Unknown company type: {value}") from exc


class CompanyService(BaseService):
    """CRUD for clients and suppliers. Both share one column layout."""

    def __init__(self, company_type: CompanyType | str, db: Session | None = None) -> None:
        super().__init__(db)
        self.company_type = _company_type(company_type)
        self.model = COMPANY_MODELS[self.company_type]

    def create(self, data: dict[str, Any], current_user: Any | None) -> Client | Supplier:
        _require_user(current_user, f"Creating a {self.company_type.value}")
        values = {key: value for key, value in data.items() if key in COMPANY_FIELDS}
        if not sanitize_text(values.get("name")):
            raise ValidationError("name is required.")
        company = self.model(**values)
        company.created_by = current_user.id
        self.db.add(company)
        self.commit()
        logger.info(
            "company.created",
            extra={"event": "company.created", "company_type": self.company_type.value, "company_id": company.id},
        )
        return company

    def get(self, company_id: int) -> Client | Supplier | None:
        return self.db.get(self.model, company_id)

    def list_all(self, search: str | None = None) -> list[Client | Supplier]:
        query = self.db.query(self.model)
        if search:
            query = query.filter(self.model.name.ilike(f"%{search.strip()}%"))
        return query.order_by(self.model.name.asc()).all()

    def update(self, company_id: int, changes: dict[str, Any], current_user: Any | None) -> Client | Supplier | None:
        _require_user(current_user, f"Updating a {self.company_type.value}")
        company = self.get(company_id)
        if company is None:
            return None
        for key, value in changes.items():
            if key in COMPANY_FIELDS:
                setattr(company, key, value)
        if not sanitize_text(company.name):
            self.rollback()
            raise ValidationError("name is required.")
        self.commit()
        return company

    def delete(self, company_id: int, current_user: Any | None) -> bool:
        """Delete a company no contract references; its signers go with it."""
        _require_user(current_user, f"Deleting a {self.company_type.value}")
        company = self.get(company_id)
        if company is None:
            return False

        column = Contract.client_id if self.company_type is CompanyType.CLIENT else Contract.supplier_id
        in_use = self.db.query(Contract).filter(column == company_id).count()
        if in_use:
            raise ConflictError(f"{company.name} is referenced by {in_use} contract(s) and cannot be deleted.")

        (
            self.db.query(AuthorizedSigner)
            .filter(AuthorizedSigner.company_type == self.company_type)
            .filter(AuthorizedSigner.company_id == company_id)
            .delete(synchronize_session=False)
        )
        self.db.delete(company)
        self.commit()
        logger.info(
            "company.deleted",
            extra={"event": "company.deleted", "company_type": self.company_type.value, "company_id": company_id},
        )
        return True


class SignerService(BaseService):
    """Authorized signers attached to a client or supplier."""

    def _coerce(self, changes: dict[str, Any]) -> dict[str, Any]:
        values = {key: value for key, value in changes.items() if key in SIGNER_FIELDS}
        if values.get("company_type") is not None:
            values["company_type"] = _company_type(values["company_type"])
        return values

    def _validate(self, signer: AuthorizedSigner) -> None:
        if not sanitize_text(signer.first_name) or not sanitize_text(signer.last_name):
            raise ValidationError("first_name and last_name are required.")
        if signer.email and not is_valid_email(signer.email):
            raise ValidationError(f"Invalid email: {signer.email}")
        model = COMPANY_MODELS[_company_type(signer.company_type)]
        if self.db.get(model, signer.company_id) is None:
            raise NotFoundError(f"{value_label(signer.company_type)} not found: {signer.company_id}")

    def create(self, data: dict[str, Any], current_user: Any | None) -> AuthorizedSigner:
        _require_user(current_user, "Creating a signer")
        signer = AuthorizedSigner(**self._coerce(data))
        signer.created_by = current_user.id
        self._validate(signer)
        self.db.add(signer)
        self.commit()
        return signer

    def get(self, signer_id: int) -> AuthorizedSigner | None:
        return self.db.get(AuthorizedSigner, signer_id)

    def list_all(self, company_type: CompanyType | str | None = None, company_id: int | None = None) -> list[AuthorizedSigner]:
        query = self.db.query(AuthorizedSigner)
        if company_type is not None:
            query = query.filter(AuthorizedSigner.company_type == _company_type(company_type))
        if company_id is not None:
            query = query.filter(AuthorizedSigner.company_id == company_id)
        return query.order_by(AuthorizedSigner.last_name.asc(), AuthorizedSigner.first_name.asc()).all()

    def update(self, signer_id: int, changes: dict[str, Any], current_user: Any | None) -> AuthorizedSigner | None:
        _require_user(current_user, "Updating a signer")
        signer = self.get(signer_id)
        if signer is None:
            return None
        for key, value in self._coerce(changes).items():
            setattr(signer, key, value)
        try:
            self._validate(signer)
        except (ValidationError, NotFoundError):
            self.rollback()
            raise
        self.commit()
        return signer

    def delete(self, signer_id: int, current_user: Any | None) -> bool:
        _require_user(current_user, "Deleting a signer")
        signer = self.get(signer_id)
        if signer is None:
            return False
        self.db.delete(signer)
        self.commit()
        return True


class DocumentService(BaseService):
    """Document metadata for contracts. File bytes live in external storage."""

    def __init__(self, db: Session | None = None) -> None:
        super().__init__(db)
        self.audit = AuditService(db=self.db)

    def add_document(self, data: dict[str, Any], current_user: Any | None) -> Document:
        _require_user(current_user, "Uploading a document")
        values = {key: value for key, value in data.items() if key in DOCUMENT_FIELDS}
        if not sanitize_text(values.get("file_name")):
            raise ValidationError("file_name is required.")
        if int(values.get("file_size") or 0) < 0:
            raise ValidationError("file_size must be non-negative.")
        if self.db.get(Contract, values.get("contract_id")) is None:
            raise NotFoundError(f"Contract not found: {values.get('contract_id')}")

        document = Document(**values)
        document.uploaded_by = current_user.id
        self.db.add(document)
        self.db.flush()
        self.audit.add_audit_log(
            document.contract_id,
            audit_service.DOCUMENT_UPLOADED,
            f"Document {document.file_name} was uploaded",
            current_user,
            commit=False,
        )
        self.commit()
        return document

    def get_document(self, document_id: int) -> Document | None:
        return self.db.get(Document, document_id)

    def list_documents(self, contract_id: int) -> list[Document]:
        return (
            self.db.query(Document)
            .filter(Document.contract_id == contract_id)
            .order_by(Document.uploaded_at.desc())
            .all()
        )

    def delete_document(self, document_id: int, current_user: Any | None) -> bool:
        _require_user(current_user, "Deleting a document")
        document = self.get_document(document_id)
        if document is None:
            return False
        self.audit.add_audit_log(
            document.contract_id,
            audit_service.DOCUMENT_DELETED,
            f"Document {document.file_name} was deleted",
            current_user,
            commit=False,
        )
        self.db.delete(document)
        self.commit()
        return True


def value_label(company_type: CompanyType | str) -> str:
    return _company_type(company_type).value.capitalize()
