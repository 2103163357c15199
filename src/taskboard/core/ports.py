# src/taskboard/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The store depends on Protocols instead of concrete implementations.
This keeps persistence backends swappable and makes testing easier.
"""

from collections.abc import Callable, Sequence
from typing import Any, Protocol

TasksListener = Callable[[Sequence[Any]], None]
# Called with the new snapshot (list of Task) after every mutation.


class KeyValueStorage(Protocol):
    """
    Durable key-value store holding serialized text.

    read() returns None when nothing is stored under the key.
    write() overwrites any previous value (last write wins).
    """

    def read(self, key: str) -> str | None: ...
    def write(self, key: str, value: str) -> None: ...


class TaskRepo(Protocol):
    """What the front-end (AppState, commands, task_api) needs from a task store."""

    # Queries
    def list(self) -> list[Any]: ...
    def get(self, task_id: str) -> Any | None: ...
    def count_tasks(self) -> int: ...

    # Mutations (write-through)
    def create(self, draft: Any) -> Any: ...
    def update(self, task: Any) -> bool: ...
    def update_priority(self, task_id: str, priority: Any) -> bool: ...
    def delete(self, task_id: str) -> bool: ...

    # Observers
    def subscribe(self, listener: TasksListener) -> Callable[[], None]: ...
