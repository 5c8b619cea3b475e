"""User administration endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Header, HTTPException, status

from app.api.v1._authz import authorize_or_raise
from app.database.db import get_db_session
from app.schemas.users import UserResponse, UserRoleUpdateRequest, UserStatusUpdateRequest
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


def _not_found(user_id: int) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"User not found: {user_id}")


@router.get("/me", response_model=UserResponse)
def current_user(authorization: str | None = Header(default=None, alias="Authorization")) -> UserResponse:
    user = authorize_or_raise(authorization, "users.profile")
    with get_db_session() as session:
        row = UserService(db=session).get_user(user.id)
        if row is None:
            raise _not_found(user.id)
        return UserResponse.model_validate(row)


@router.get("", response_model=list[UserResponse])
def list_users(authorization: str | None = Header(default=None, alias="Authorization")) -> list[UserResponse]:
    authorize_or_raise(authorization, "users.manage")
    with get_db_session() as session:
        return [UserResponse.model_validate(row) for row in UserService(db=session).list_users()]


@router.patch("/{user_id}/role", response_model=UserResponse)
def change_role(
    user_id: int,
    payload: UserRoleUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> UserResponse:
    user = authorize_or_raise(authorization, "users.manage")
    with get_db_session() as session:
        row = UserService(db=session).change_role(user_id, payload.role, current_user=user)
        if row is None:
            raise _not_found(user_id)
        return UserResponse.model_validate(row)


@router.patch("/{user_id}/status", response_model=UserResponse)
def change_status(
    user_id: int,
    payload: UserStatusUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> UserResponse:
    user = authorize_or_raise(authorization, "users.manage")
    with get_db_session() as session:
        row = UserService(db=session).change_status(user_id, payload.status, current_user=user)
        if row is None:
            raise _not_found(user_id)
        return UserResponse.model_validate(row)
