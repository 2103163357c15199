# src/taskboard/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- picks the storage backend and wires the TaskStore into AppState,
- runs the store's one-time initialization.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import KeyValueStorage
from ..core.state import AppState
from ..storage.json_file_storage import JsonFileStorage
from ..storage.memory_storage import MemoryStorage
from ..storage.sqlite_storage import SqliteStorage
from ..tasks.task_models import DEFAULT_TASKS
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    # Storage adapters create their own directories.
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def open_storage(settings) -> KeyValueStorage:
    backend = getattr(settings, "storage_backend", "file")
    if backend == "memory":
        return MemoryStorage()
    if backend == "sqlite":
        return SqliteStorage(settings.storage_path)
    return JsonFileStorage(settings.storage_path)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    storage: KeyValueStorage
    try:
        storage = open_storage(settings)
    except Exception:
        # Persistence is best-effort: keep the app usable in memory.
        logger.exception(
            "Storage backend %r unavailable; falling back to in-memory storage.",
            getattr(settings, "storage_backend", "?"),
        )
        storage = MemoryStorage()

    store = TaskStore(
        storage,
        key=settings.storage_key,
        seed=DEFAULT_TASKS if settings.seed_defaults else None,
        strict=settings.strict_not_found,
    )
    store.initialize()

    return AppState(settings=settings, store=store, storage=storage)
