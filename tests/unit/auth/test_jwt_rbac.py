from __future__ import annotations

import pytest

from app.auth.jwt import create_token_pair, decode_jwt
from app.auth.rbac import ACTION_ROLES, ROLE_RANKS, can, has_permission, require_action, require_role
from app.core.exceptions import AuthenticationError, AuthorizationError

ROLES = ["viewer", "editor", "manager", "admin"]


def test_jwt_roundtrip_contains_required_claims():
    tokens = create_token_pair(user_id=10, role="admin", secret="test-secret")
    claims = decode_jwt(tokens.access_token, secret="test-secret")
    assert claims["sub"] == "10"
    assert claims["role"] == "admin"
    assert claims["token_use"] == "access"
    assert "exp" in claims
    assert "iat" in claims
    assert "jti" in claims


def test_jwt_rejects_tampered_signature():
    tokens = create_token_pair(user_id=10, role="viewer", secret="test-secret")
    with pytest.raises(AuthenticationError):
        decode_jwt(tokens.access_token, secret="other-secret")


def test_role_ranks_are_strictly_ordered():
    assert [ROLE_RANKS[role] for role in ROLES] == [1, 2, 3, 4]


@pytest.mark.parametrize("required", ROLES)
def test_has_permission_is_monotone_in_current_role(required):
    allowed = [has_permission(role, required) for role in ROLES]
    assert allowed == sorted(allowed)
    assert has_permission(required, required) is True


def test_has_permission_fails_closed():
    assert has_permission(None, "viewer") is False
    assert has_permission("superuser", "viewer") is False
    assert has_permission("admin", "superuser") is False


def test_require_role_distinguishes_missing_user_from_insufficient_role():
    with pytest.raises(AuthenticationError):
        require_role(None, "viewer")
    with pytest.raises(AuthorizationError):
        require_role("editor", "manager")
    require_role("manager", "editor")


def test_action_matrix():
    assert can("viewer", "contracts.read")
    assert not can("viewer", "contracts.create")
    assert can("editor", "contracts.update")
    assert not can("editor", "contracts.delete")
    assert can("manager", "contracts.delete")
    assert not can("manager", "users.manage")
    assert can("admin", "notifications.settings")
    assert not can("admin", "unknown.action")
    assert all(action.count(".") == 1 for action in ACTION_ROLES)


def test_require_action_blocks_unknown_action():
    with pytest.raises(AuthorizationError):
        require_action("admin", "unknown.action")
