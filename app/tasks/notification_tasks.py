"""Background tasks for the notification refresh."""

from __future__ import annotations

import logging
import time
from typing import Any

from app.tasks.celery_app import celery_app
from app.tasks.hooks import after_task, before_task
from app.tasks.registry import default_registry
from app.utils.ids import new_trace_id

logger = logging.getLogger(__name__)


def _serialize_error(exc: Exception) -> dict[str, str]:
    return {
        "type": exc.__class__.__name__,
        "message": str(exc),
    }


def execute_registered_task(
    task_key: str,
    user_id: int | None = None,
    max_retries: int = 2,
    base_backoff_seconds: float = 0.25,
) -> dict[str, Any]:
    """Execute a registered task with bounded retries and exponential backoff."""
    context = {"user_id": user_id, "trace_id": new_trace_id()}
    logger.info("task.start", extra=before_task(task_key=task_key, context=context))

    attempt_used = 0
    last_error: dict[str, str] | None = None

    for attempt in range(max_retries + 1):
        attempt_used = attempt
        try:
            executor = default_registry.get(task_key)
            result = executor()
            logger.info(
                "task.finish",
                extra=after_task(task_key=task_key, context=context, status="succeeded", retry_count=attempt),
            )
            return {"task_key": task_key, "status": "succeeded", "retry_count": attempt, "result": result}
        except KeyError as exc:
            last_error = _serialize_error(exc)
            break
        except Exception as exc:
            last_error = _serialize_error(exc)
            if attempt < max_retries:
                delay = max(0.0, base_backoff_seconds) * (2**attempt)
                if delay > 0:
                    time.sleep(delay)
                continue
            break

    logger.error(
        "task.failed",
        extra=after_task(task_key=task_key, context=context, status="failed", error_payload=last_error),
    )
    return {
        "task_key": task_key,
        "status": "failed",
        "retry_count": attempt_used,
        "error_payload": last_error,
    }


@celery_app.task(name="notifications.refresh")
def refresh_notifications_task() -> dict[str, Any]:
    return execute_registered_task("notifications.refresh")
