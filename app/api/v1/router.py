"""Root API router for v1 endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from app.api.v1 import auth, contracts, health, notifications, reports, supplements, users
from app.api.v1.companies import clients_router, suppliers_router
from app.core.config import get_config

api_router = APIRouter(prefix=get_config().API_PREFIX)
api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(contracts.router)
api_router.include_router(supplements.router)
api_router.include_router(clients_router)
api_router.include_router(suppliers_router)
api_router.include_router(notifications.router)
api_router.include_router(reports.router)
api_router.include_router(users.router)


def get_api_router() -> APIRouter:
    return api_router
