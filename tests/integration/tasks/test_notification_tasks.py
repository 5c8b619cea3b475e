from __future__ import annotations

import app.tasks.notification_tasks as tasks_module
from app.tasks.celery_app import celery_app
from app.tasks.registry import TaskRegistry, default_registry


def test_beat_schedule_runs_notification_refresh():
    entry = celery_app.conf.beat_schedule["notifications-refresh"]
    assert entry["task"] == "notifications.refresh"
    assert entry["schedule"] >= 60


def test_default_registry_exposes_refresh():
    assert default_registry.keys() == ["notifications.refresh"]


def test_execute_registered_task_retries_then_succeeds(monkeypatch):
    calls = {"count": 0}

    def flaky():
        calls["count"] += 1
        if calls["count"] < 2:
            raise RuntimeError("database busy")
        return {"created": 3}

    registry = TaskRegistry()
    registry.register("notifications.refresh", flaky)
    monkeypatch.setattr(tasks_module, "default_registry", registry)

    result = tasks_module.execute_registered_task("notifications.refresh", base_backoff_seconds=0)

    assert result["status"] == "succeeded"
    assert result["retry_count"] == 1
    assert result["result"] == {"created": 3}


def test_execute_registered_task_reports_failure(monkeypatch):
    def broken():
        raise RuntimeError("boom")

    registry = TaskRegistry()
    registry.register("notifications.refresh", broken)
    monkeypatch.setattr(tasks_module, "default_registry", registry)

    result = tasks_module.execute_registered_task("notifications.refresh", max_retries=1, base_backoff_seconds=0)

    assert result["status"] == "failed"
    assert result["error_payload"] == {"type": "RuntimeError", "message": "boom"}


def test_unknown_task_key_fails_without_retry():
    result = tasks_module.execute_registered_task("unknown.task", base_backoff_seconds=0)
    assert result["status"] == "failed"
    assert result["retry_count"] == 0


def test_refresh_task_uses_notification_service(isolated_session_factory):
    result = tasks_module.refresh_notifications_task.run()
    assert result["status"] == "succeeded"
    assert result["result"] == {"created": 0}
