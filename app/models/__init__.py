"""Modular SQLAlchemy model package for the contract schema."""

from app.models.audit_log import AuditLog
from app.models.base import Base
from app.models.company import AuthorizedSigner, Client, Supplier
from app.models.contract import Contract
from app.models.document import Document
from app.models.enums import (
    CompanyType,
    ContractStatus,
    ContractType,
    NotificationStatus,
    SupplementStatus,
    UserRole,
    UserStatus,
)
from app.models.notification import Notification, NotificationSettings
from app.models.supplement import Supplement
from app.models.user import User

__all__ = [
    "AuditLog",
    "AuthorizedSigner",
    "Base",
    "Client",
    "CompanyType",
    "Contract",
    "ContractStatus",
    "ContractType",
    "Document",
    "Notification",
    "NotificationSettings",
    "NotificationStatus",
    "Supplement",
    "SupplementStatus",
    "Supplier",
    "User",
    "UserRole",
    "UserStatus",
]
