# src/taskboard/tasks/task_store.py

from __future__ import annotations

import dataclasses
import logging
import uuid
from collections.abc import Callable, Iterable

from ..core.ports import KeyValueStorage, TasksListener
from .errors import TaskCodecError, TaskNotFoundError
from .task_codec import decode_tasks, encode_tasks
from .task_models import DEFAULT_TASKS, Priority, Task, TaskDraft

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "tasks"


def new_task_id() -> str:
    """128-bit random id (UUID4, hex form)."""
    return uuid.uuid4().hex


class TaskStore:
    """
    In-memory task collection mirrored to a key-value storage.

    - initialize() must be called exactly once before anything else.
    - Every mutation writes the full collection through to storage before
      returning. Persistence is best-effort: a failing write is logged and
      the in-memory change stays in effect.
    - Unknown ids in update/update_priority/delete are ignored (return False)
      unless the store is strict, in which case TaskNotFoundError is raised.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = DEFAULT_STORAGE_KEY,
        seed: Iterable[Task] | None = DEFAULT_TASKS,
        id_factory: Callable[[], str] = new_task_id,
        strict: bool = False,
    ) -> None:
        self._storage = storage
        self._key = key
        self._seed = tuple(seed or ())
        self._id_factory = id_factory
        self._strict = strict

        self._tasks: list[Task] = []
        self._listeners: list[TasksListener] = []
        self._initialized = False

    # ---- lifecycle ----

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """Load the collection from storage, or seed it if nothing is stored."""
        if self._initialized:
            raise RuntimeError("TaskStore.initialize() called twice")

        raw: str | None
        try:
            raw = self._storage.read(self._key)
        except Exception:
            logger.exception("Failed to read tasks from storage key=%s; seeding.", self._key)
            raw = None

        tasks: list[Task] | None = None
        if raw is not None:
            try:
                tasks = decode_tasks(raw)
            except TaskCodecError:
                logger.exception("Stored tasks under key=%s are unreadable; seeding.", self._key)

        if tasks is None:
            tasks = list(self._seed)
            source = "seed"
        else:
            source = "storage"

        self._tasks = self._dedupe(tasks)
        self._initialized = True
        logger.info("TaskStore ready key=%s total=%d source=%s", self._key, len(self._tasks), source)

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError("TaskStore used before initialize()")

    @staticmethod
    def _dedupe(tasks: list[Task]) -> list[Task]:
        # Keep the first occurrence of each id.
        seen: set[str] = set()
        out: list[Task] = []
        for t in tasks:
            if t.id in seen:
                logger.warning("Dropping stored task with duplicate id=%s", t.id)
                continue
            seen.add(t.id)
            out.append(t)
        return out

    # ---- low-level helpers ----

    def _index_of(self, task_id: str) -> int | None:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    def _missing(self, op: str, task_id: str) -> bool:
        if self._strict:
            raise TaskNotFoundError(task_id)
        logger.debug("%s ignored: no task id=%s", op, task_id)
        return False

    def _allocate_id(self) -> str:
        taken = {t.id for t in self._tasks}
        while True:
            task_id = self._id_factory()
            if task_id not in taken:
                return task_id
            logger.warning("Generated id collided with an existing task: %s", task_id)

    def _commit(self) -> None:
        """Persist the whole collection, then notify subscribers."""
        # Encoding errors are bugs, not storage failures: let them propagate.
        payload = encode_tasks(self._tasks)
        try:
            self._storage.write(self._key, payload)
        except Exception:
            logger.exception("Failed to persist %d tasks to key=%s", len(self._tasks), self._key)

        snapshot = list(self._tasks)
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Task listener %r failed", listener)

    # ---- public API ----

    def list(self) -> list[Task]:
        self._require_initialized()
        return list(self._tasks)

    def get(self, task_id: str) -> Task | None:
        self._require_initialized()
        idx = self._index_of(task_id)
        return None if idx is None else self._tasks[idx]

    def count_tasks(self) -> int:
        self._require_initialized()
        return len(self._tasks)

    def create(self, draft: TaskDraft) -> Task:
        self._require_initialized()
        task = draft.with_id(self._allocate_id())
        self._tasks.append(task)
        logger.debug("Task added id=%s priority=%s due=%s", task.id, task.priority, task.due_date)
        self._commit()
        return task

    def update(self, task: Task) -> bool:
        """Replace the task with the same id; its position is kept."""
        self._require_initialized()
        idx = self._index_of(task.id)
        if idx is None:
            return self._missing("update", task.id)
        self._tasks[idx] = task
        logger.debug("Task updated id=%s", task.id)
        self._commit()
        return True

    def update_priority(self, task_id: str, priority: Priority) -> bool:
        self._require_initialized()
        idx = self._index_of(task_id)
        if idx is None:
            return self._missing("update_priority", task_id)
        self._tasks[idx] = dataclasses.replace(self._tasks[idx], priority=Priority(priority))
        logger.debug("Task priority id=%s -> %s", task_id, priority)
        self._commit()
        return True

    def delete(self, task_id: str) -> bool:
        self._require_initialized()
        idx = self._index_of(task_id)
        if idx is None:
            return self._missing("delete", task_id)
        del self._tasks[idx]
        logger.debug("Task deleted id=%s", task_id)
        self._commit()
        return True

    def subscribe(self, listener: TasksListener) -> Callable[[], None]:
        """
        Register a callback invoked with the new snapshot after each mutation.

        Returns a function that removes the callback again.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe
