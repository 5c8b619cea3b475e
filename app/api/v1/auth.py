"""Auth endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from app.auth.jwt import TokenPair, create_token_pair, decode_jwt
from app.core.config import get_config
from app.core.exceptions import AuthenticationError
from app.database.db import get_db_session
from app.models.enums import value_of
from app.schemas.auth import LoginRequest, RefreshRequest, RegisterRequest, TokenResponse
from app.schemas.users import UserResponse
from app.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


def _token_response(tokens: TokenPair) -> TokenResponse:
    return TokenResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        token_type=tokens.token_type,
    )


def _issue_tokens(user_id: int, role: str) -> TokenResponse:
    cfg = get_config()
    tokens = create_token_pair(
        user_id=user_id,
        role=role,
        secret=cfg.JWT_SECRET,
        access_ttl_minutes=cfg.JWT_ACCESS_TTL_MINUTES,
        refresh_ttl_days=cfg.JWT_REFRESH_TTL_DAYS,
    )
    return _token_response(tokens)


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest) -> TokenResponse:
    with get_db_session() as session:
        try:
            user = UserService(db=session).authenticate(payload.email, payload.password)
        except AuthenticationError as exc:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
        return _issue_tokens(user.id, value_of(user.role))


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest) -> UserResponse:
    with get_db_session() as session:
        user = UserService(db=session).register(name=payload.name, email=payload.email, password=payload.password)
        return UserResponse.model_validate(user)


@router.post("/refresh", response_model=TokenResponse)
def refresh(payload: RefreshRequest) -> TokenResponse:
    cfg = get_config()
    try:
        claims = decode_jwt(payload.refresh_token, secret=cfg.JWT_SECRET)
    except AuthenticationError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc

    if claims.get("token_use") != "refresh":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token is not a refresh token.")

    with get_db_session() as session:
        user = UserService(db=session).get_user(int(claims["sub"]))
        if user is None or not user.is_active:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account is not available.")
        return _issue_tokens(user.id, value_of(user.role))
