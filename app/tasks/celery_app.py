"""Celery application bootstrap and beat schedule."""

from __future__ import annotations

import os

from celery import Celery

from app.core.config import get_config

config = get_config()

celery_app = Celery(
    "pacta",
    broker=config.CELERY_BROKER_URL,
    backend=config.CELERY_RESULT_BACKEND,
    include=["app.tasks.notification_tasks"],
)
celery_app.conf.update(
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    beat_schedule={
        "notifications-refresh": {
            "task": "notifications.refresh",
            "schedule": float(config.NOTIFICATION_REFRESH_SECONDS),
        },
    },
)

# Local/dev convenience: run tasks synchronously when requested.
if os.getenv("CELERY_TASK_ALWAYS_EAGER", "false").lower() in {"1", "true", "yes", "on"}:
    celery_app.conf.task_always_eager = True
