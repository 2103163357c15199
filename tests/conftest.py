# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskboard.core.state import AppState
from taskboard.tasks.task_models import Priority, TaskDraft, TaskStatus
from taskboard.tasks.task_store import TaskStore

from .fakes import RecordingStorage


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskboard-test",
        log_level="DEBUG",
        console_enabled=False,
        data_dir=tmp_path / "data",
        storage_backend="memory",
        storage_path=tmp_path / "data" / "storage",
        storage_key="tasks",
        seed_defaults=True,
        strict_not_found=False,
        search_debounce_ms=10,
    )


@pytest.fixture()
def storage() -> RecordingStorage:
    return RecordingStorage()


@pytest.fixture()
def store(storage: RecordingStorage) -> TaskStore:
    """Initialized store seeded with the five default tasks."""
    s = TaskStore(storage)
    s.initialize()
    return s


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, storage: RecordingStorage) -> AppState:
    return AppState(settings=settings, store=store, storage=storage)


@pytest.fixture()
def draft() -> TaskDraft:
    return TaskDraft(
        title="Write release notes",
        description="Summarize the changes for 1.2",
        due_date="2025-06-01",
        priority=Priority.HIGH,
        status=TaskStatus.IN_PROGRESS,
    )
