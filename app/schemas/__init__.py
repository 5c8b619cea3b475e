"""Pydantic schema package for API contracts."""

from app.schemas.auth import LoginRequest, RefreshRequest, RegisterRequest, TokenClaims, TokenResponse
from app.schemas.common import APIEnvelope, DeleteResponse, ErrorEnvelope, Pagination
from app.schemas.companies import (
    CompanyCreateRequest,
    CompanyResponse,
    CompanyUpdateRequest,
    DocumentCreateRequest,
    DocumentResponse,
    SignerCreateRequest,
    SignerResponse,
)
from app.schemas.contracts import (
    AuditLogResponse,
    ContractCreateRequest,
    ContractResponse,
    ContractStatusUpdateRequest,
    ContractUpdateRequest,
)
from app.schemas.notifications import (
    NotificationResponse,
    NotificationSettingsResponse,
    NotificationSettingsUpdateRequest,
)
from app.schemas.supplements import SupplementCreateRequest, SupplementResponse, SupplementUpdateRequest
from app.schemas.users import UserResponse, UserRoleUpdateRequest, UserStatusUpdateRequest

__all__ = [
    "APIEnvelope",
    "AuditLogResponse",
    "CompanyCreateRequest",
    "CompanyResponse",
    "CompanyUpdateRequest",
    "ContractCreateRequest",
    "ContractResponse",
    "ContractStatusUpdateRequest",
    "ContractUpdateRequest",
    "DeleteResponse",
    "DocumentCreateRequest",
    "DocumentResponse",
    "ErrorEnvelope",
    "LoginRequest",
    "NotificationResponse",
    "NotificationSettingsResponse",
    "NotificationSettingsUpdateRequest",
    "Pagination",
    "RefreshRequest",
    "RegisterRequest",
    "SignerCreateRequest",
    "SignerResponse",
    "SupplementCreateRequest",
    "SupplementResponse",
    "SupplementUpdateRequest",
    "TokenClaims",
    "TokenResponse",
    "UserResponse",
    "UserRoleUpdateRequest",
    "UserStatusUpdateRequest",
]
