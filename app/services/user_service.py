"""User registration, authentication and administration service."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from app.auth.rbac import require_role
from app.core.config import get_config
from app.core.exceptions import AuthenticationError, ConflictError, ValidationError
from app.core.security import hash_password, verify_password
from app.models import User
from app.models.enums import UserRole, UserStatus, value_of
from app.services.base_service import BaseService
from app.utils.validators import is_valid_email, sanitize_text

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


def _normalize_email(email: str | None) -> str:
    return sanitize_text(email, max_len=320).lower()


class UserService(BaseService):
    """Service for user accounts. Role and status changes are admin-only."""

    def _hash(self, password: str) -> str:
        return hash_password(password, iterations=get_config().PASSWORD_HASH_ITERATIONS)

    def get_user(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == _normalize_email(email)).first()

    def list_users(self) -> list[User]:
        return self.db.query(User).order_by(User.created_at.asc(), User.id.asc()).all()

    def register(
        self,
        name: str,
        email: str,
        password: str,
        role: UserRole | str = UserRole.VIEWER,
    ) -> User:
        """Create an active account. Self-registration always lands on ``viewer``."""
        normalized = _normalize_email(email)
        if not sanitize_text(name):
            raise ValidationError("name is required.")
        if not is_valid_email(normalized):
            raise ValidationError(f"Invalid email: {email}")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"password must be at least {MIN_PASSWORD_LENGTH} characters.")
        if self.get_by_email(normalized) is not None:
            raise ConflictError(f"Email already registered: {normalized}")
        try:
            resolved_role = UserRole(value_of(role))
        except ValueError as exc:
            raise ValidationError(f"Unknown role: {role}") from exc

        user = User(
            name=sanitize_text(name, max_len=255),
            email=normalized,
            hashed_password=self._hash(password),
            role=resolved_role,
            status=UserStatus.ACTIVE,
        )
        self.db.add(user)
        self.commit()
        logger.info("user.registered", extra={"event": "user.registered", "user_id": user.id, "role": user.role.value})
        return user

    def authenticate(self, email: str, password: str) -> User:
        """Verify credentials for an active account and stamp ``last_access``."""
        user = self.get_by_email(email)
        if user is None or not verify_password(password, user.hashed_password):
            raise AuthenticationError("Invalid credentials.")
        if not user.is_active:
            raise AuthenticationError("Account is inactive.")
        user.last_access = datetime.now(timezone.utc)
        self.commit()
        logger.info("user.login", extra={"event": "user.login", "user_id": user.id})
        return user

    def change_role(self, user_id: int, role: UserRole | str, current_user: Any | None) -> User | None:
        require_role(getattr(current_user, "role", None), UserRole.ADMIN)
        try:
            resolved = UserRole(value_of(role))
        except ValueError as exc:
            raise ValidationError(f"Unknown role: {role}") from exc
        user = self.get_user(user_id)
        if user is None:
            return None
        user.role = resolved
        self.commit()
        logger.info(
            "user.role.changed",
            extra={"event": "user.role.changed", "user_id": user_id, "role": resolved.value, "actor_id": current_user.id},
        )
        return user

    def change_status(self, user_id: int, status: UserStatus | str, current_user: Any | None) -> User | None:
        require_role(getattr(current_user, "role", None), UserRole.ADMIN)
        try:
            resolved = UserStatus(value_of(status))
        except ValueError as exc:
            raise ValidationError(f"Unknown status: {status}") from exc
        user = self.get_user(user_id)
        if user is None:
            return None
        if user.id == current_user.id and resolved is UserStatus.INACTIVE:
            raise ConflictError("Administrators cannot deactivate their own account.")
        user.status = resolved
        self.commit()
        logger.info(
            "user.status.changed",
            extra={"event": "user.status.changed", "user_id": user_id, "status": resolved.value, "actor_id": current_user.id},
        )
        return user

    def seed_default_admin(self) -> User:
        """Create the configured admin account when no admin exists yet."""
        existing = self.db.query(User).filter(User.role == UserRole.ADMIN).first()
        if existing is not None:
            return existing
        cfg = get_config()
        return self.register(
            name="Administrator",
            email=cfg.DEFAULT_ADMIN_EMAIL,
            password=cfg.DEFAULT_ADMIN_PASSWORD,
            role=UserRole.ADMIN,
        )
