"""Application entrypoint for the FastAPI service."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.api.v1.router import get_api_router
from app.core.config import get_config
from app.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DatabaseError,
    NotFoundError,
    PactaException,
    ValidationError,
)
from app.core.startup import bootstrap

logger = logging.getLogger(__name__)

ERROR_STATUS: tuple[tuple[type[PactaException], int, str], ...] = (
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED, "authentication_error"),
    (AuthorizationError, status.HTTP_403_FORBIDDEN, "authorization_error"),
    (NotFoundError, status.HTTP_404_NOT_FOUND, "not_found"),
    (ConflictError, status.HTTP_409_CONFLICT, "conflict"),
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY, "validation_error"),
    (DatabaseError, status.HTTP_503_SERVICE_UNAVAILABLE, "database_error"),
)


def map_domain_error(exc: PactaException) -> tuple[int, str]:
    for exc_type, status_code, error_code in ERROR_STATUS:
        if isinstance(exc, exc_type):
            return status_code, error_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error"


async def _handle_domain_error(request: Request, exc: PactaException) -> JSONResponse:
    status_code, error_code = map_domain_error(exc)
    if status_code >= 500:
        logger.error(
            "api.request.failed",
            extra={"event": "api.request.failed", "path": request.url.path, "error_code": error_code},
        )
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "error_code": error_code, "detail": str(exc)},
    )


def create_app() -> FastAPI:
    cfg = get_config()
    app = FastAPI(title=cfg.APP_NAME, version=cfg.APP_VERSION)
    app.include_router(get_api_router())
    app.add_exception_handler(PactaException, _handle_domain_error)

    @app.get("/")
    def root() -> dict:
        return {"service": cfg.APP_NAME, "version": cfg.APP_VERSION, "api_prefix": cfg.API_PREFIX}

    return app


# Expose ASGI app for `uvicorn app.main:app`.
app = create_app()


if __name__ == "__main__":
    import uvicorn

    bootstrap()
    cfg = get_config()
    uvicorn.run(app, host=cfg.API_HOST, port=cfg.API_PORT)
