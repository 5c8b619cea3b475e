"""Configuration module for the PACTA application."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import urlparse

from dotenv import load_dotenv

from app.core.exceptions import ConfigurationError

load_dotenv()

NOTIFICATION_MATCH_MODES = {"exact", "catch_up"}


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _as_int_list(value: str | None, default: tuple[int, ...]) -> tuple[int, ...]:
    if value is None or not value.strip():
        return default
    try:
        return tuple(int(part) for part in value.split(",") if part.strip())
    except ValueError as exc:
        raise ConfigurationError("NOTIFICATION_DEFAULT_THRESHOLDS must be a comma-separated list of integers.") from exc


@dataclass(frozen=True)
class Config:
    """Runtime configuration with validation."""

    APP_NAME: str
    APP_VERSION: str
    ENV: str
    DEBUG: bool
    DATABASE_URL: str
    DB_CONNECTIVITY_REQUIRED: bool
    JWT_SECRET: str
    JWT_ACCESS_TTL_MINUTES: int
    JWT_REFRESH_TTL_DAYS: int
    PASSWORD_HASH_ITERATIONS: int
    DEFAULT_ADMIN_EMAIL: str
    DEFAULT_ADMIN_PASSWORD: str
    NOTIFICATION_REFRESH_SECONDS: int
    NOTIFICATION_MATCH_MODE: str
    NOTIFICATION_DEFAULT_THRESHOLDS: tuple[int, ...]
    CELERY_BROKER_URL: str
    CELERY_RESULT_BACKEND: str
    API_HOST: str
    API_PORT: int
    API_PREFIX: str
    LOG_LEVEL: str
    LOG_FILE: str

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"


def _build_config(env: str | None = None) -> Config:
    resolved_env = (env or os.getenv("ENV", "development")).strip().lower()
    debug = _as_bool(os.getenv("DEBUG"), default=(resolved_env != "production"))
    redis_url = os.getenv("REDIS_URL", "redis://localhost:6379/0")

    config = Config(
        APP_NAME="PACTA",
        APP_VERSION=os.getenv("APP_VERSION", "1.0.0"),
        ENV=resolved_env,
        DEBUG=debug if resolved_env != "production" else False,
        DATABASE_URL=os.getenv("DATABASE_URL", "sqlite:///./pacta.db"),
        DB_CONNECTIVITY_REQUIRED=_as_bool(
            os.getenv("DB_CONNECTIVITY_REQUIRED"), default=(resolved_env == "production")
        ),
        JWT_SECRET=os.getenv("JWT_SECRET", "change_me_jwt_secret"),
        JWT_ACCESS_TTL_MINUTES=int(os.getenv("JWT_ACCESS_TTL_MINUTES", "60")),
        JWT_REFRESH_TTL_DAYS=int(os.getenv("JWT_REFRESH_TTL_DAYS", "14")),
        PASSWORD_HASH_ITERATIONS=int(os.getenv("PASSWORD_HASH_ITERATIONS", "240000")),
        DEFAULT_ADMIN_EMAIL=os.getenv("DEFAULT_ADMIN_EMAIL", "admin@pacta.local"),
        DEFAULT_ADMIN_PASSWORD=os.getenv("DEFAULT_ADMIN_PASSWORD", "change_me_admin"),
        NOTIFICATION_REFRESH_SECONDS=int(os.getenv("NOTIFICATION_REFRESH_SECONDS", "3600")),
        NOTIFICATION_MATCH_MODE=os.getenv("NOTIFICATION_MATCH_MODE", "exact").strip().lower(),
        NOTIFICATION_DEFAULT_THRESHOLDS=_as_int_list(
            os.getenv("NOTIFICATION_DEFAULT_THRESHOLDS"), default=(30, 15, 7)
        ),
        CELERY_BROKER_URL=os.getenv("CELERY_BROKER_URL", redis_url),
        CELERY_RESULT_BACKEND=os.getenv("CELERY_RESULT_BACKEND", redis_url),
        API_HOST=os.getenv("API_HOST", "0.0.0.0"),
        API_PORT=int(os.getenv("API_PORT", "8000")),
        API_PREFIX=os.getenv("API_PREFIX", "/api/v1"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        LOG_FILE=os.getenv("LOG_FILE", "pacta.log"),
    )
    _validate_config(config)
    return config


def _validate_database_url(database_url: str) -> None:
    parsed = urlparse(database_url)
    if parsed.scheme not in {"sqlite", "postgresql", "postgresql+psycopg2"}:
        raise ConfigurationError(
            "DATABASE_URL must use sqlite:// or postgresql:// style URL."
        )
    if parsed.scheme.startswith("postgresql") and not parsed.hostname:
        raise ConfigurationError("PostgreSQL DATABASE_URL is missing hostname.")


def _validate_config(config: Config) -> None:
    _validate_database_url(config.DATABASE_URL)

    if config.JWT_ACCESS_TTL_MINUTES < 1:
        raise ConfigurationError("JWT_ACCESS_TTL_MINUTES must be >= 1.")
    if config.JWT_REFRESH_TTL_DAYS < 1:
        raise ConfigurationError("JWT_REFRESH_TTL_DAYS must be >= 1.")
    if config.PASSWORD_HASH_ITERATIONS < 1000:
        raise ConfigurationError("PASSWORD_HASH_ITERATIONS must be >= 1000.")
    if config.NOTIFICATION_REFRESH_SECONDS < 60:
        raise ConfigurationError("NOTIFICATION_REFRESH_SECONDS must be >= 60.")
    if config.NOTIFICATION_MATCH_MODE not in NOTIFICATION_MATCH_MODES:
        raise ConfigurationError("NOTIFICATION_MATCH_MODE must be one of exact/catch_up.")
    if any(threshold < 0 for threshold in config.NOTIFICATION_DEFAULT_THRESHOLDS):
        raise ConfigurationError("NOTIFICATION_DEFAULT_THRESHOLDS must be non-negative.")
    if config.LOG_LEVEL not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise ConfigurationError("LOG_LEVEL must be one of DEBUG/INFO/WARNING/ERROR/CRITICAL.")
    if config.is_production and "change_me" in config.JWT_SECRET.lower():
        raise ConfigurationError("Production JWT_SECRET uses placeholder value.")
    if config.is_production and "change_me" in config.DEFAULT_ADMIN_PASSWORD.lower():
        raise ConfigurationError("Production DEFAULT_ADMIN_PASSWORD uses placeholder value.")


@lru_cache(maxsize=8)
def get_config(env: str | None = None) -> Config:
    """Get validated configuration for the requested environment."""
    return _build_config(env)
