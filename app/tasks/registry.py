"""Task registry mapping task keys to executable callables."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from app.services.notification_service import NotificationService

TaskExecutor = Callable[[], Any]


class TaskRegistry:
    """Mutable task registry for scheduled maintenance tasks."""

    def __init__(self) -> None:
        self._executors: dict[str, TaskExecutor] = {}

    def register(self, task_key: str, executor: TaskExecutor) -> None:
        self._executors[task_key] = executor

    def get(self, task_key: str) -> TaskExecutor:
        if task_key not in self._executors:
            raise KeyError(f"Unknown task key: {task_key}")
        return self._executors[task_key]

    def keys(self) -> list[str]:
        return sorted(self._executors.keys())


def _refresh_notifications() -> dict[str, int]:
    with NotificationService() as service:
        created = service.refresh()
    return {"created": len(created)}


def build_default_registry() -> TaskRegistry:
    registry = TaskRegistry()
    registry.register("notifications.refresh", _refresh_notifications)
    return registry


default_registry = build_default_registry()
