"""Dependency providers for API handlers and background workers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from app.auth.jwt import decode_jwt
from app.core.config import Config, get_config
from app.core.exceptions import AuthenticationError
from app.database import db as db_module
from app.models import User
from app.models.enums import value_of


@dataclass(frozen=True)
class CurrentUser:
    id: int
    name: str
    email: str
    role: str
    claims: dict[str, Any]


def get_settings() -> Config:
    """Return validated application configuration."""
    return get_config()


def get_current_user(token: str, settings: Config | None = None) -> CurrentUser:
    """Resolve the acting user from an access token.

    The token only carries the user id; name, role and status are read from
    the database so a demoted or deactivated account loses access at once.
    """
    cfg = settings or get_settings()
    claims = decode_jwt(token=token, secret=cfg.JWT_SECRET)
    if claims.get("token_use") != "access":
        raise AuthenticationError("Token is not an access token.")
    try:
        user_id = int(claims["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise AuthenticationError("Invalid auth claims.") from exc

    with db_module.get_db_session() as session:
        user = session.get(User, user_id)
        if user is None:
            raise AuthenticationError("User no longer exists.")
        if not user.is_active:
            raise AuthenticationError("Account is inactive.")
        return CurrentUser(
            id=user.id,
            name=user.name,
            email=user.email,
            role=value_of(user.role),
            claims=claims,
        )
