"""Startup validation and bootstrap helpers."""

from __future__ import annotations

import logging

from app.core.config import get_config
from app.core.exceptions import ConfigurationError
from app.core.logging_config import configure_logging
from app.database.db import get_active_database_url, verify_database_connection
from app.utils.validators import normalize_thresholds

logger = logging.getLogger(__name__)


def validate_startup_config() -> None:
    """Fail-fast config and connectivity checks."""
    config = get_config()
    database_ok = verify_database_connection()
    active_database_url = get_active_database_url()
    if not database_ok and config.DB_CONNECTIVITY_REQUIRED:
        raise RuntimeError("Database connectivity check failed.")
    if not database_ok:
        logger.warning(
            "startup.database.connectivity_optional_failed",
            extra={"event": "startup.database.connectivity_optional_failed"},
        )

    if config.is_production and active_database_url.startswith("sqlite"):
        logger.warning(
            "startup.production.sqlite_detected",
            extra={"event": "startup.production.sqlite_detected"},
        )

    try:
        thresholds = normalize_thresholds(config.NOTIFICATION_DEFAULT_THRESHOLDS)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid notification thresholds: {exc}") from exc
    if not thresholds:
        logger.warning(
            "startup.notifications.no_thresholds",
            extra={"event": "startup.notifications.no_thresholds"},
        )

    logger.info(
        "startup.config.validated",
        extra={
            "event": "startup.config.validated",
            "env": config.ENV,
            "database_url_scheme": active_database_url.split("://", 1)[0],
            "db_connectivity_required": config.DB_CONNECTIVITY_REQUIRED,
            "notification_match_mode": config.NOTIFICATION_MATCH_MODE,
            "notification_thresholds": thresholds,
        },
    )


def bootstrap() -> None:
    """Initialize logging and validate runtime configuration."""
    configure_logging()
    validate_startup_config()
