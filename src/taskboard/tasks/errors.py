# src/taskboard/tasks/errors.py

from __future__ import annotations


class TaskboardError(Exception):
    """Base class for all taskboard errors."""


class TaskValidationError(TaskboardError, ValueError):
    """
    Form-level validation failure.

    `errors` maps a field name (title, description, due_date, priority, status)
    to a human-readable message, so a front-end can highlight each field.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors)) or "-"
        super().__init__(f"Invalid task fields: {fields}")


class TaskNotFoundError(TaskboardError, KeyError):
    """Raised by a strict store when the target id does not exist."""

    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__(task_id)

    def __str__(self) -> str:
        return f"Task not found: {self.task_id}"


class TaskCodecError(TaskboardError, ValueError):
    """Stored collection text could not be decoded."""


class StorageError(TaskboardError, OSError):
    """Persistence adapter failed to read or write."""
