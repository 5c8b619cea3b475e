"""Canonical enum values for the contract schema."""

from __future__ import annotations

import enum


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    EDITOR = "editor"
    VIEWER = "viewer"


class UserStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class ContractStatus(str, enum.Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
    PENDING = "pending"
    CANCELLED = "cancelled"


class ContractType(str, enum.Enum):
    SERVICE = "service"
    PURCHASE = "purchase"
    LEASE = "lease"
    PARTNERSHIP = "partnership"
    EMPLOYMENT = "employment"
    OTHER = "other"


class SupplementStatus(str, enum.Enum):
    DRAFT = "draft"
    APPROVED = "approved"
    ACTIVE = "active"


class NotificationStatus(str, enum.Enum):
    UNREAD = "unread"
    READ = "read"
    ACKNOWLEDGED = "acknowledged"


class CompanyType(str, enum.Enum):
    CLIENT = "client"
    SUPPLIER = "supplier"


def value_of(member: enum.Enum | str | None) -> str | None:
    """Return the raw value for enum members and plain strings alike."""
    if member is None:
        return None
    return member.value if isinstance(member, enum.Enum) else str(member)
