"""Append-only audit trail for contract and supplement mutations."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from app.core.exceptions import AuthenticationError
from app.models import AuditLog
from app.services.base_service import BaseService
from app.utils.dates import as_utc
from app.utils.ids import new_record_id
from app.utils.validators import sanitize_text

logger = logging.getLogger(__name__)

CONTRACT_CREATED = "Contract Created"
CONTRACT_UPDATED = "Contract Updated"
CONTRACT_DELETED = "Contract Deleted"
SUPPLEMENT_CREATED = "Supplement Created"
SUPPLEMENT_UPDATED = "Supplement Updated"
SUPPLEMENT_DELETED = "Supplement Deleted"
DOCUMENT_UPLOADED = "Document Uploaded"
DOCUMENT_DELETED = "Document Deleted"


class AuditService(BaseService):
    """Records who did what to which contract. Entries are never modified."""

    def add_audit_log(
        self,
        contract_id: int,
        action: str,
        details: str,
        current_user: Any | None,
        commit: bool = True,
    ) -> AuditLog:
        """Append one entry, snapshotting the acting user's id and name.

        Raises ``AuthenticationError`` when there is no current user so the
        caller cannot lose an audit entry silently.
        """
        if current_user is None:
            raise AuthenticationError("Audit logging requires an authenticated user.")

        log = AuditLog(
            id=new_record_id(),
            contract_id=contract_id,
            user_id=current_user.id,
            user_name=current_user.name,
            action=sanitize_text(action, max_len=120),
            details=sanitize_text(details),
            timestamp=datetime.now(timezone.utc),
        )
        self.db.add(log)
        if commit:
            self.commit()
        logger.info(
            "audit.recorded",
            extra={
                "event": "audit.recorded",
                "contract_id": contract_id,
                "user_id": current_user.id,
                "action": log.action,
            },
        )
        return log

    def get_contract_audit_logs(self, contract_id: int) -> list[AuditLog]:
        """Entries for one contract, newest first."""
        rows = self.db.query(AuditLog).filter(AuditLog.contract_id == contract_id).all()
        return sorted(rows, key=lambda row: as_utc(row.timestamp), reverse=True)
