"""Role-based authorization helpers.

Roles form a strict total order. A user may perform an action when the rank
of their role is at least the rank of the role the action requires; there are
no per-resource grants.
"""

from __future__ import annotations

from app.core.exceptions import AuthenticationError, AuthorizationError
from app.models.enums import UserRole

ROLE_RANKS: dict[str, int] = {
    UserRole.VIEWER.value: 1,
    UserRole.EDITOR.value: 2,
    UserRole.MANAGER.value: 3,
    UserRole.ADMIN.value: 4,
}

# Minimum role per mutating action, kept explicit for endpoint-level declarations.
ACTION_ROLES: dict[str, str] = {
    "contracts.read": UserRole.VIEWER.value,
    "contracts.create": UserRole.EDITOR.value,
    "contracts.update": UserRole.EDITOR.value,
    "contracts.delete": UserRole.MANAGER.value,
    "supplements.read": UserRole.VIEWER.value,
    "supplements.create": UserRole.EDITOR.value,
    "supplements.update": UserRole.EDITOR.value,
    "supplements.delete": UserRole.MANAGER.value,
    "companies.read": UserRole.VIEWER.value,
    "companies.create": UserRole.EDITOR.value,
    "companies.update": UserRole.EDITOR.value,
    "companies.delete": UserRole.MANAGER.value,
    "documents.create": UserRole.EDITOR.value,
    "documents.delete": UserRole.MANAGER.value,
    "notifications.read": UserRole.VIEWER.value,
    "notifications.update": UserRole.VIEWER.value,
    "notifications.refresh": UserRole.VIEWER.value,
    "notifications.settings": UserRole.ADMIN.value,
    "reports.read": UserRole.VIEWER.value,
    "audit.read": UserRole.VIEWER.value,
    "users.profile": UserRole.VIEWER.value,
    "users.manage": UserRole.ADMIN.value,
}


def _normalize(role: str | UserRole | None) -> str | None:
    if role is None:
        return None
    value = role.value if isinstance(role, UserRole) else str(role)
    return value.strip().lower()


def role_rank(role: str | UserRole | None) -> int:
    """Return the rank of a role, 0 for unknown or missing roles."""
    normalized = _normalize(role)
    if normalized is None:
        return 0
    return ROLE_RANKS.get(normalized, 0)


def has_permission(current_role: str | UserRole | None, required_role: str | UserRole) -> bool:
    """Check whether ``current_role`` is at least ``required_role``.

    Fails closed: no current user, an unknown current role or an unknown
    required role all deny.
    """
    current = role_rank(current_role)
    required = role_rank(required_role)
    if current == 0 or required == 0:
        return False
    return current >= required


def require_role(current_role: str | UserRole | None, required_role: str | UserRole) -> None:
    """Raise when a role is below the required role."""
    if current_role is None:
        raise AuthenticationError("An authenticated user is required.")
    if has_permission(current_role, required_role):
        return
    raise AuthorizationError(f"Role '{_normalize(current_role)}' lacks required role '{_normalize(required_role)}'.")


def can(current_role: str | UserRole | None, action: str) -> bool:
    """Check a named action against its minimum role."""
    required = ACTION_ROLES.get(action)
    if required is None:
        return False
    return has_permission(current_role, required)


def require_action(current_role: str | UserRole | None, action: str) -> None:
    """Raise when the role may not perform ``action``."""
    required = ACTION_ROLES.get(action)
    if required is None:
        raise AuthorizationError(f"Unknown action: {action}")
    require_role(current_role, required)
